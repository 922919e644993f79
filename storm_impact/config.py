"""
Storm Impact — Configuration: paths, source schema, category and magnitude rules.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with STORM_DATA_DIR env var
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("STORM_DATA_DIR", str(Path.home() / "storm_impact_data")))
BASE_FOLDER = _data_dir
SOURCE_FILE = _data_dir / "StormData.csv.bz2"
REPORTS_FOLDER = _data_dir / "reports"

# ---------------------------------------------------------------------------
# Source download
# ---------------------------------------------------------------------------
SOURCE_URL = "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2"
DOWNLOAD_TIMEOUT = 300
DOWNLOAD_CHUNK_SIZE = 1024 * 1024

# ---------------------------------------------------------------------------
# Column mapping from raw NOAA storm data → internal names
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "BGN_DATE": "begin_date",
    "STATE": "state",
    "COUNTYNAME": "county_name",
    "EVTYPE": "event_type",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "PROPDMG": "property_damage",
    "PROPDMGEXP": "property_damage_exp",
    "CROPDMG": "crop_damage",
    "CROPDMGEXP": "crop_damage_exp",
}

NUMERIC_COLS = ["fatalities", "injuries", "property_damage", "crop_damage"]
COUNT_COLS = ["fatalities", "injuries"]  # whole numbers only
CATEGORICAL_COLS = ["state", "county_name"]

# BGN_DATE looks like "4/18/1950 0:00:00"; only the date token is parsed
DATE_FORMAT = "%m/%d/%Y"

# ---------------------------------------------------------------------------
# Analysis window
# Recorded-event volume steps up sharply in 1993 when NOAA broadened the
# event types it logs; earlier years are not comparable.
# ---------------------------------------------------------------------------
CUTOFF_YEAR = 1993

# ---------------------------------------------------------------------------
# Event category rules (order matters: LAST match wins)
# Patterns are matched as case-insensitive substrings of EVTYPE.
# ---------------------------------------------------------------------------
OTHER_CATEGORY = "other"

EVENT_CATEGORY_RULES = [
    ("WIND", "Wind"),
    ("FLOOD", "Flood"),
    ("HURRICANE", "Tropical Cyclone"),
    ("SNOW", "Winter Storm"),
    ("HEAT", "Heat"),
    ("HAIL", "Hail"),
    ("TORNADO", "Tornado"),
    ("RAIN", "Rain"),
    # Repeats rule 1. It makes WIND outrank FLOOD, HEAT, HAIL, TORNADO and RAIN
    # ("TSTM WIND/HAIL" is Wind, not Hail).
    ("WIND", "Wind"),
    ("TROPICAL", "Tropical Cyclone"),
    ("WINTER", "Winter Storm"),
    ("FIRE", "Wildfire"),
    ("LIGHTNING", "Lightning"),
    ("AVALANCHE", "Avalanche"),
    ("ICE", "Winter Storm"),
    ("BLIZZARD", "Winter Storm"),
]

# Closed label set: every distinct rule label in first-seen order, then "other"
CATEGORY_LABELS = list(dict.fromkeys(label for _, label in EVENT_CATEGORY_RULES)) + [OTHER_CATEGORY]

# ---------------------------------------------------------------------------
# Damage magnitude codes (order matters: LAST match wins)
# Anything absent or unrecognized ("", "+", "?", "0"-"8", "H") stays at 1.
# ---------------------------------------------------------------------------
DEFAULT_MULTIPLIER = 1

MAGNITUDE_RULES = [
    ("K", 1_000),
    ("M", 1_000_000),
    ("B", 1_000_000_000),
]

# ---------------------------------------------------------------------------
# Legend shown in the report
# ---------------------------------------------------------------------------
CATEGORY_LEGEND = [
    ("Wind", "WIND anywhere, unless a later rule also matches (TSTM WIND/HAIL is Wind)"),
    ("Flood", "FLOOD: flash flood, river flood, coastal flood, ..."),
    ("Tropical Cyclone", "HURRICANE or TROPICAL: hurricanes, typhoons, tropical storms"),
    ("Winter Storm", "SNOW, WINTER, ICE or BLIZZARD; ICE, WINTER and BLIZZARD outrank WIND (ICE STORM/WIND)"),
    ("Heat", "HEAT: heat, excessive heat, heat wave"),
    ("Hail", "HAIL without WIND: hail, small hail, hailstorm"),
    ("Tornado", "TORNADO, including tornado/waterspout combinations"),
    ("Rain", "RAIN: heavy rain, freezing rain"),
    ("Wildfire", "FIRE: wildfire, forest fire, brush fire"),
    ("Lightning", "LIGHTNING"),
    ("Avalanche", "AVALANCHE"),
    ("other", "Everything that matches none of the above"),
]
