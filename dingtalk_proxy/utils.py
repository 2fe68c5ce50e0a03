import re
from datetime import datetime, timezone
from typing import Optional

# Zero time (equivalente a um timestamp ausente no payload)
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}

_FRACTION_RE = re.compile(r'\.(\d+)')


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Mesmo vocabulário do Alertmanager/Go: 1/t/true/TRUE... e 0/f/false/FALSE...

    Retorna None quando o texto não é um booleano reconhecido.
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def parse_timestamp(value) -> datetime:
    if not value or not isinstance(value, str):
        return ZERO_TIME
    clean = value.strip()
    if clean.endswith(('Z', 'z')):
        clean = clean[:-1] + '+00:00'
    # Alertmanager envia nanossegundos; datetime aceita no máximo micro
    clean = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), clean, count=1)
    try:
        parsed = datetime.fromisoformat(clean)
    except ValueError:
        return ZERO_TIME
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _zone_abbreviation(dt: datetime) -> str:
    offset = dt.utcoffset()
    if offset is None or not offset:
        return "UTC"
    name = dt.tzname()
    if name and not name.startswith("UTC"):
        return name
    return dt.strftime("%z")


def format_start_time(dt: datetime) -> str:
    """Formata como "Jan 2, 2006 at 3:04pm (MST)"."""
    hour = dt.hour % 12 or 12
    meridiem = "am" if dt.hour < 12 else "pm"
    return f"{dt:%b} {dt.day}, {dt.year:04d} at {hour}:{dt:%M}{meridiem} ({_zone_abbreviation(dt)})"
