import re
from datetime import UTC, datetime

SIX_DIGITS_RE = re.compile(r"[0-9]{6}")


def is_six_digits(value: str) -> bool:
    return bool(SIX_DIGITS_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)


def epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)
