from kanban.core.result import Err, ErrorKind, Ok, Result
from kanban.utils import is_six_digits

MAX_NAME_LENGTH = 100


def validate_code(code: str) -> Result[str]:
    """Validate a plaintext passcode.

    Requirements:
    - Exactly 6 ASCII digits
    """
    if not is_six_digits(code):
        return Err(ErrorKind.MALFORMED_INPUT, "Passcode must be exactly 6 digits")
    return Ok(code)


def validate_name(name: str) -> Result[str]:
    """Validate and normalize a passcode display name (surrounding whitespace is dropped)."""
    name = name.strip()
    if not name:
        return Err(ErrorKind.MALFORMED_INPUT, "Name is required")
    if len(name) > MAX_NAME_LENGTH:
        return Err(ErrorKind.MALFORMED_INPUT, f"Name must be at most {MAX_NAME_LENGTH} characters")
    return Ok(name)
