import re

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_SLUG_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,62}[a-z0-9])?$")

def clean_str(val, max_len: int = 255) -> str | None:
    """
    Trim and enforce max length. Returns None if empty after cleaning
    or if the value is not a string at all.
    """
    if not isinstance(val, str):
        return None
    s = val.strip()
    if not s:
        return None
    return s[:max_len]

def clean_text(val) -> str | None:
    """Like clean_str but keeps inner whitespace/newlines and has no length cap."""
    if not isinstance(val, str):
        return None
    s = val.strip()
    return s or None

def is_valid_email(val: str | None) -> bool:
    if not val:
        return False
    return bool(_EMAIL_RE.match(val))

def is_valid_slug(val: str | None) -> bool:
    if not val:
        return False
    return bool(_SLUG_RE.match(val))

def parse_bool(val):
    """
    Accept real JSON booleans, and 'true'/'false' strings from query args.
    Returns None when the value is neither.
    """
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        v = val.strip().lower()
        if v in ("true", "1", "yes"):
            return True
        if v in ("false", "0", "no"):
            return False
    return None
