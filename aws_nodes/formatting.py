"""Human readable rendering of ages and resource amounts."""

from datetime import datetime, timezone

_BINARY_UNITS = (
    ("Ti", 1024**4),
    ("Gi", 1024**3),
    ("Mi", 1024**2),
    ("Ki", 1024),
)


def humanize_age(created_at: datetime | None, now: datetime | None = None) -> str:
    """Render the time since ``created_at`` as whole days, hours or minutes.

    Args:
        created_at: Creation timestamp (naive values are taken as UTC)
        now: Reference time, defaults to the current time

    Returns:
        ``"3d"``, ``"5h"`` or ``"12m"``; ``"<unknown>"`` without a timestamp
    """
    if created_at is None:
        return "<unknown>"
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = max(int((now - created_at).total_seconds()), 0)
    days, remainder = divmod(seconds, 86400)
    if days > 0:
        return f"{days}d"
    hours = remainder // 3600
    if hours > 0:
        return f"{hours}h"
    return f"{remainder // 60}m"


def format_cpu(millis: int) -> str:
    """Render millicores in canonical quantity form: ``"2"`` or ``"1500m"``."""
    if millis % 1000 == 0:
        return str(millis // 1000)
    return f"{millis}m"


def format_memory(num_bytes: int) -> str:
    """Render bytes with the largest binary unit that keeps the value >= 1.

    Values below 1Ki are printed as a plain integer.
    """
    for suffix, size in _BINARY_UNITS:
        if num_bytes >= size:
            return f"{num_bytes / size:.1f}{suffix}"
    return str(num_bytes)


def format_percentage(value: float) -> str:
    return f"{value:.1f}%"
