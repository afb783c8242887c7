"""Pure functions for CPF (Brazilian taxpayer number) handling.

A CPF has 11 digits; the last two are check digits computed from the
first nine. The validators accept any string and never raise.
"""

import re

CPF_LENGTH = 11

_NON_DIGIT = re.compile(r"[^0-9]")
_CPF_DISPLAY = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$", re.ASCII)


def strip_cpf_formatting(value: str) -> str:
    """Remove every non-digit character from a CPF.

    Args:
        value: CPF as typed, e.g. "529.982.247-25".

    Returns:
        Digits only, e.g. "52998224725". No validation is performed.
    """
    return _NON_DIGIT.sub("", value)


def matches_cpf_pattern(value: str) -> bool:
    """Check the grouped display format XXX.XXX.XXX-XX."""
    return _CPF_DISPLAY.fullmatch(value) is not None


def _check_digit(digits: str) -> int:
    # Weights run from len(digits) + 1 down to 2
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    check = 11 - (total % 11)
    return 0 if check >= 10 else check


def compute_check_digits(base: str) -> str:
    """Compute the two CPF check digits for the first nine digits.

    Args:
        base: The first nine digits of a CPF.

    Returns:
        The two check digits as a string.

    Raises:
        ValueError: If base is not exactly nine digits.
    """
    if len(base) != 9 or strip_cpf_formatting(base) != base:
        raise ValueError(f"Expected 9 digits, got {base!r}")

    first = _check_digit(base)
    second = _check_digit(base + str(first))
    return f"{first}{second}"


def validate_cpf(value: str) -> bool:
    """Validate a CPF, formatted or not.

    The check is a checksum: it detects most typos but a changed digit
    can, rarely, produce another valid number.

    Args:
        value: CPF string in any format.

    Returns:
        True if the CPF has 11 digits, is not a repeated digit and both
        check digits match.
    """
    digits = strip_cpf_formatting(value)

    if len(digits) != CPF_LENGTH:
        return False

    # 000.000.000-00, 111.111.111-11, ... pass the arithmetic but are invalid
    if len(set(digits)) == 1:
        return False

    return compute_check_digits(digits[:9]) == digits[9:]


def format_cpf(value: str) -> str:
    """Group CPF digits as they are typed, up to XXX.XXX.XXX-XX.

    Partial input is grouped as far as it goes ("529982" -> "529.982")
    and digits past the eleventh are dropped.

    Args:
        value: CPF string in any format, complete or not.

    Returns:
        Grouped digits. No validation is performed.
    """
    digits = strip_cpf_formatting(value)[:CPF_LENGTH]
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}.{digits[3:]}"
    if len(digits) <= 9:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:]}"
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
