import re
from typing import Optional

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_valid_email(email: Optional[str]) -> bool:
    if is_blank(email):
        return False
    return EMAIL_RE.match(email.strip()) is not None
