import pandas as pd
import pytest


def raw_row(
    date="1/1/2000 0:00:00",
    evtype="TSTM WIND",
    fatalities=0,
    injuries=0,
    propdmg=0,
    propexp=None,
    cropdmg=0,
    cropexp=None,
    state="AL",
    county="MOBILE",
):
    return {
        "STATE__": 1.0,
        "BGN_DATE": date,
        "STATE": state,
        "COUNTYNAME": county,
        "EVTYPE": evtype,
        "FATALITIES": float(fatalities),
        "INJURIES": float(injuries),
        "PROPDMG": float(propdmg),
        "PROPDMGEXP": propexp,
        "CROPDMG": float(cropdmg),
        "CROPDMGEXP": cropexp,
        "REFNUM": 1,
    }


@pytest.fixture
def raw_frame():
    """Raw NOAA-shaped rows: two kept, one pre-cutoff, one without damage."""
    return pd.DataFrame([
        raw_row("4/18/1995 0:00:00", "TSTM WIND", fatalities=1, propdmg=10, propexp="K"),
        raw_row("6/1/1994 0:00:00", "RIVER FLOOD", injuries=2, propdmg=5, propexp="M"),
        raw_row("7/4/1990 0:00:00", "EXCESSIVE HEAT", fatalities=3, propexp=""),
        raw_row("1/1/2000 0:00:00", "FUNNEL CLOUD"),
    ])


@pytest.fixture
def records():
    """Already-normalised records, as resolve_damage expects them."""
    return pd.DataFrame({
        "begin_date": pd.to_datetime(["1995-04-18", "1994-06-01", "1990-07-04", "2000-01-01", "2001-03-03"]),
        "year": [1995, 1994, 1990, 2000, 2001],
        "event_type": ["TSTM WIND", "RIVER FLOOD", "EXCESSIVE HEAT", "FUNNEL CLOUD", "ICE STORM WIND"],
        "fatalities": [1, 0, 3, 0, 0],
        "injuries": [0, 2, 0, 0, 4],
        "property_damage": [10.0, 5.0, 0.0, 0.0, 2.5],
        "property_damage_exp": ["K", "M", "", "", "b"],
        "crop_damage": [0.0, 0.0, 0.0, 0.0, 100.0],
        "crop_damage_exp": ["", "", "", "", None],
    })


@pytest.fixture
def make_row():
    return raw_row
