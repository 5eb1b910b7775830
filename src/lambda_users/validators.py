import re

# TLDs longer than 4 characters are rejected.
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,4}$")


def is_email_valid(email: str) -> bool:
    """Syntactic check only: 3-254 characters and a local@domain.tld shape."""
    if len(email) < 3 or len(email) > 254:
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None
