import re


def normalize_phone(phone: str) -> str:
    """Normalize a 10-digit phone number to +91XXXXXXXXXX format.

    Non-digit characters are stripped and an existing +91 / 0 trunk
    prefix is tolerated. Raises ValueError if the remaining string is
    not exactly 10 digits long.
    """
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) == 12 and digits.startswith("91"):
        digits = digits[2:]
    elif len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]
    if len(digits) != 10:
        raise ValueError("phone must be 10 digits")
    return f"+91{digits}"


__all__ = ["normalize_phone"]
