"""Tests for giftlist.domain.taxid pure functions."""

import pytest

from giftlist.domain.taxid import (
    compute_check_digits,
    format_cpf,
    matches_cpf_pattern,
    strip_cpf_formatting,
    validate_cpf,
)

VALID_CPF = "52998224725"


class TestValidateCpf:
    """Tests for validate_cpf."""

    def test_known_valid_unformatted(self) -> None:
        """Should accept a CPF with correct check digits."""
        assert validate_cpf(VALID_CPF) is True

    def test_known_valid_formatted(self) -> None:
        """Should ignore display separators."""
        assert validate_cpf("529.982.247-25") is True
        assert validate_cpf("111.444.777-35") is True

    def test_check_digit_of_ten_becomes_zero(self) -> None:
        """Should treat a computed check digit of 10 as 0."""
        # First check digit: 11 - (210 % 11) = 10 -> 0
        assert validate_cpf("123.456.789-09") is True

    @pytest.mark.parametrize("digit", "0123456789")
    def test_repeated_digits_are_invalid(self, digit: str) -> None:
        """Should reject all eleven-identical-digit sequences."""
        assert validate_cpf(digit * 11) is False

    @pytest.mark.parametrize("value", ["", "5299822472", "529982247255", "1", "123456789012345"])
    def test_wrong_length_is_invalid(self, value: str) -> None:
        """Should reject anything but 11 digits after stripping."""
        assert validate_cpf(value) is False

    def test_single_digit_change_is_detected(self) -> None:
        """Should reject every single-digit substitution of a valid CPF."""
        for position in range(11):
            for replacement in "0123456789":
                if replacement == VALID_CPF[position]:
                    continue
                mutated = VALID_CPF[:position] + replacement + VALID_CPF[position + 1 :]
                assert validate_cpf(mutated) is False, mutated

    def test_wrong_check_digits(self) -> None:
        """Should reject mismatching first or second check digit."""
        assert validate_cpf("529.982.247-35") is False
        assert validate_cpf("529.982.247-26") is False

    def test_letters_are_stripped(self) -> None:
        """Should strip non-digits before counting."""
        assert validate_cpf("CPF: 529 982 247 25") is True
        assert validate_cpf("abcdefghijk") is False

    def test_non_ascii_digits_are_stripped(self) -> None:
        """Should only count ASCII digits."""
        assert validate_cpf("٥٢٩٩٨٢٢٤٧٢٥") is False


class TestStripCpfFormatting:
    """Tests for strip_cpf_formatting."""

    def test_removes_separators(self) -> None:
        """Should leave only the digits."""
        assert strip_cpf_formatting("529.982.247-25") == VALID_CPF

    def test_does_not_validate(self) -> None:
        """Should not care about length or checksum."""
        assert strip_cpf_formatting("12-3") == "123"
        assert strip_cpf_formatting("") == ""


class TestFormatCpf:
    """Tests for format_cpf."""

    def test_groups_digits(self) -> None:
        """Should insert separators at fixed offsets."""
        assert format_cpf(VALID_CPF) == "529.982.247-25"

    def test_reformats_partial_formatting(self) -> None:
        """Should normalize any existing separators."""
        assert format_cpf("529982.247/25") == "529.982.247-25"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("", ""),
            ("529", "529"),
            ("5299", "529.9"),
            ("529982", "529.982"),
            ("5299822", "529.982.2"),
            ("529982247", "529.982.247"),
            ("5299822472", "529.982.247-2"),
        ],
    )
    def test_groups_partial_input_as_typed(self, value: str, expected: str) -> None:
        assert format_cpf(value) == expected

    def test_truncates_after_eleven_digits(self) -> None:
        """Should drop anything typed past the last check digit."""
        assert format_cpf("529.982.247-2512") == "529.982.247-25"


class TestMatchesCpfPattern:
    """Tests for matches_cpf_pattern."""

    def test_display_form_matches(self) -> None:
        assert matches_cpf_pattern("529.982.247-25") is True

    @pytest.mark.parametrize("value", [VALID_CPF, "529.982.247.25", "529-982-247-25", " 529.982.247-25"])
    def test_other_forms_do_not_match(self, value: str) -> None:
        """Should only accept XXX.XXX.XXX-XX exactly."""
        assert matches_cpf_pattern(value) is False


class TestComputeCheckDigits:
    """Tests for compute_check_digits."""

    def test_known_numbers(self) -> None:
        """Should reproduce the check digits of known CPFs."""
        assert compute_check_digits("529982247") == "25"
        assert compute_check_digits("111444777") == "35"
        assert compute_check_digits("123456789") == "09"

    @pytest.mark.parametrize("base", ["12345678", "1234567890", "12345678a"])
    def test_rejects_bad_base(self, base: str) -> None:
        """Should raise ValueError unless given nine digits."""
        with pytest.raises(ValueError):
            compute_check_digits(base)
