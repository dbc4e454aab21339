import re
from typing import Optional

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
_HHMM = re.compile(HHMM_PATTERN)


def is_hhmm(value: Optional[str]) -> bool:
    """True for a zero-padded 24h ``HH:mm`` string (the only comparable form)."""
    return isinstance(value, str) and bool(_HHMM.match(value))
