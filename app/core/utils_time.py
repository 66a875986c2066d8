from datetime import datetime, date, time, timezone
from typing import Optional, Union

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def as_utc(value: Optional[Union[datetime, date]]) -> Optional[datetime]:
    """
    Normaliza a datetime aware en UTC. SQLite devuelve datetimes naive aunque la
    columna sea DateTime(timezone=True): se asume que ya están en UTC.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def whole_days_between(later, earlier) -> int:
    """Días completos transcurridos (trunca hacia cero, igual que un contador de días)."""
    delta = as_utc(later) - as_utc(earlier)
    days = delta.total_seconds() / 86400
    return int(days)

def hours_between(later, earlier) -> float:
    return (as_utc(later) - as_utc(earlier)).total_seconds() / 3600
