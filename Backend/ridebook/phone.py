"""Phone and email helpers shared by the lookup endpoint and the booking validator."""

import re

MIN_PHONE_LENGTH = 7

# Accepts: +17744153244, +1 774 415 3244, 774-415-3244, (774) 415-3244, etc.
_PHONE_RE = re.compile(r"\+?[\d\s\-().]+")
_PHONE_FORMATTING_RE = re.compile(r"[\s\-().]")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def normalize_phone(phone: str | None) -> str:
    """
    Strip whitespace, hyphens, parentheses and periods from a phone number.

    The result is only a comparison key; stored phones keep their raw form.

        (774) 415-3244   -> 7744153244
        +1 774.415.3244  -> +17744153244
    """
    if not phone:
        return ""
    return _PHONE_FORMATTING_RE.sub("", phone)


def is_valid_phone(phone: str | None) -> bool:
    """
    True for a phone of allowed characters that keeps at least 7 characters
    once normalized. Surrounding whitespace is ignored.

        " +1 774 415 3244"  -> True
        "-------"           -> False (normalizes to "")
    """
    phone = phone.strip() if phone else ""
    if len(phone) < MIN_PHONE_LENGTH or _PHONE_RE.fullmatch(phone) is None:
        return False
    return len(normalize_phone(phone)) >= MIN_PHONE_LENGTH


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return _EMAIL_RE.fullmatch(email) is not None
