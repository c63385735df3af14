# ABOUTME: Best-effort normalization of API timestamp strings into display labels.
# ABOUTME: hour_label yields "HH:MM" and day_label a weekday abbreviation; neither ever raises.

from datetime import datetime

NOT_AVAILABLE = "N/A"

TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%d %H:%M:%S",
    "%H:%M:%S",
    "%H:%M",
)


def hour_label(value: str | None) -> str:
    """Convert a timestamp or time-of-day string of unknown format into an "HH:MM" label.

    Tries each known layout strictly, then falls back to slicing the time out of
    anything shaped like "<date>T<hh>:<mm>...", then to returning any string that
    contains a colon unchanged. Everything else becomes "N/A".
    """
    if value is None:
        return NOT_AVAILABLE

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime("%H:%M")
        except ValueError:
            continue

    if "T" in value:
        # Components pass through verbatim, no zero-padding.
        parts = value.partition("T")[2].split(":")
        if len(parts) >= 2:
            return f"{parts[0]}:{parts[1]}"

    if ":" in value:
        return value

    return NOT_AVAILABLE


def day_label(value: str | None) -> str:
    """Convert a "YYYY-MM-DD" date into an abbreviated weekday name such as "Mon"."""
    if value is None:
        return NOT_AVAILABLE
    try:
        return datetime.strptime(value, "%Y-%m-%d").strftime("%a")
    except ValueError:
        return NOT_AVAILABLE
