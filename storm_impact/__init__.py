"""Storm Impact — NOAA storm events: casualties and economic loss by storm category."""
__version__ = "1.0.0"
