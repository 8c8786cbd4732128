from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware "now"; naive datetimes are rejected on insert."""
    return datetime.now(timezone.utc)
