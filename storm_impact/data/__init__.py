"""Data fetching, loading, normalization, filtering and the in-memory store."""
from .loader import load_records, prepare_records
from .store import StormStore
from .quality import (
    DataQualityReport,
    MalformedDateError,
    MissingNumericFieldError,
    InvalidNumericFieldError,
)
from .normalize import classify_event_type, classify_event_types, unit_multiplier, unit_multipliers, resolve_damage
from .filters import damage_reported, since_year, apply_filters
