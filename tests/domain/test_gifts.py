"""Tests for giftlist.domain.gifts pure functions."""

import pytest

from giftlist.domain.gifts import (
    MAX_GIFT_PRICE,
    Gift,
    GiftStatus,
    event_type_id,
    filter_by_category,
    format_brl,
    gift_categories,
    gift_from_api,
    gift_payload,
    list_progress,
    parse_price,
    resolve_event_type,
    slugify,
    sort_gifts,
    validate_gift_price,
)
from giftlist.domain.models import Money


def make_gift(gift_id: str, price: int, status: str = "AVAILABLE", name: str = "", category: str | None = None) -> Gift:
    return Gift(id=gift_id, name=name or gift_id, price=Money(price), status=status, category=category)


class TestParsePrice:
    """Tests for parse_price."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("150", 15000),
            ("150.5", 15050),
            ("150,50", 15050),
            ("1.234,56", 123456),
            ("R$ 1.234,56", 123456),
            ("R$1234", 123400),
            ("0", 0),
        ],
    )
    def test_accepted_formats(self, text: str, expected: int) -> None:
        assert parse_price(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "-10", "R$", "nan", "1,2,3"])
    def test_invalid_is_none(self, text: str) -> None:
        """Should return None for unparseable or negative prices."""
        assert parse_price(text) is None


class TestValidateGiftPrice:
    """Tests for validate_gift_price."""

    def test_valid_price(self) -> None:
        assert validate_gift_price(Money(15000)) == (True, None)

    def test_maximum_is_inclusive(self) -> None:
        assert validate_gift_price(MAX_GIFT_PRICE) == (True, None)

    def test_above_maximum(self) -> None:
        """Should reject prices over R$ 999.999,00."""
        is_valid, error = validate_gift_price(Money(MAX_GIFT_PRICE + 1))
        assert is_valid is False
        assert error == "O valor máximo para um presente é de R$ 999.999,00"

    def test_zero(self) -> None:
        is_valid, error = validate_gift_price(Money(0))
        assert is_valid is False
        assert error is not None


class TestFormatBrl:
    """Tests for format_brl."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "R$ 0,00"),
            (5, "R$ 0,05"),
            (3333, "R$ 33,33"),
            (123456, "R$ 1.234,56"),
            (99_999_900, "R$ 999.999,00"),
            (-1050, "-R$ 10,50"),
        ],
    )
    def test_format(self, amount: int, expected: str) -> None:
        assert format_brl(Money(amount)) == expected


class TestSlugify:
    """Tests for slugify."""

    def test_spaces_become_dashes(self) -> None:
        assert slugify("Casamento Ana e Joao") == "casamento-ana-e-joao"

    def test_drops_accents_and_symbols(self) -> None:
        """Should drop characters outside a-z, 0-9 and dash."""
        assert slugify("Chá de Bebê 2025!") == "ch-de-beb-2025"

    def test_whitespace_runs_collapse(self) -> None:
        assert slugify("a   b\tc") == "a-b-c"

    def test_already_a_slug(self) -> None:
        assert slugify("minha-lista") == "minha-lista"


class TestEventTypeId:
    """Tests for event_type_id."""

    def test_custom_label(self) -> None:
        assert event_type_id("  Bodas de Prata ") == "BODAS_DE_PRATA"

    def test_default_type(self) -> None:
        assert event_type_id("casamento") == "CASAMENTO"


class TestResolveEventType:
    """Tests for resolve_event_type."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("Chá de Casa Nova", "CHA_CASA_NOVA"),
            ("chá de bebê", "CHA_DE_BEBE"),
            ("  Aniversário ", "ANIVERSARIO"),
            ("cha_casa_nova", "CHA_CASA_NOVA"),
            ("CASAMENTO", "CASAMENTO"),
        ],
    )
    def test_default_label_or_id_gives_its_id(self, label: str, expected: str) -> None:
        assert resolve_event_type(label) == expected

    def test_custom_label(self) -> None:
        """Should fall back to a custom id when no default type matches."""
        assert resolve_event_type("Bodas de Prata") == "BODAS_DE_PRATA"


class TestListProgress:
    """Tests for list_progress."""

    def test_reserved_and_purchased_count_as_raised(self) -> None:
        """Should count every non-available gift as raised."""
        gifts = [
            make_gift("a", 10000),
            make_gift("b", 5000, GiftStatus.RESERVED.value),
            make_gift("c", 5000, GiftStatus.PURCHASED.value),
        ]
        progress = list_progress(gifts)

        assert progress.total == 20000
        assert progress.raised == 10000
        assert progress.percent == 50
        assert progress.gift_count == 3
        assert progress.taken_count == 2

    def test_percent_rounds_to_nearest(self) -> None:
        one_third = list_progress([make_gift("a", 10000, "RESERVED"), make_gift("b", 20000)])
        two_thirds = list_progress([make_gift("a", 20000, "RESERVED"), make_gift("b", 10000)])

        assert one_third.percent == 33
        assert two_thirds.percent == 67

    def test_empty_list(self) -> None:
        progress = list_progress([])
        assert (progress.total, progress.raised, progress.percent) == (0, 0, 0)


class TestSortAndFilter:
    """Tests for sort_gifts, filter_by_category and gift_categories."""

    def test_default_puts_available_first(self) -> None:
        """Should keep list order within available and taken gifts."""
        gifts = [make_gift("a", 1), make_gift("b", 2, "RESERVED"), make_gift("c", 3)]
        assert [g.id for g in sort_gifts(gifts)] == ["a", "c", "b"]

    def test_price_orders(self) -> None:
        gifts = [make_gift("a", 300), make_gift("b", 100), make_gift("c", 200)]
        assert [g.id for g in sort_gifts(gifts, "price-asc")] == ["b", "c", "a"]
        assert [g.id for g in sort_gifts(gifts, "price-desc")] == ["a", "c", "b"]

    def test_name_order_ignores_case(self) -> None:
        gifts = [make_gift("1", 1, name="panela"), make_gift("2", 1, name="Abajur")]
        assert [g.name for g in sort_gifts(gifts, "name")] == ["Abajur", "panela"]

    def test_unknown_order_raises_valueerror(self) -> None:
        with pytest.raises(ValueError):
            sort_gifts([], "random")

    def test_missing_category_is_outros(self) -> None:
        gifts = [make_gift("a", 1, category="COZINHA"), make_gift("b", 1), make_gift("c", 1, category="COZINHA")]

        assert gift_categories(gifts) == ["COZINHA", "OUTROS"]
        assert [g.id for g in filter_by_category(gifts, "OUTROS")] == ["b"]
        assert len(filter_by_category(gifts, None)) == 3


class TestApiConversion:
    """Tests for gift_from_api and gift_payload."""

    def test_gift_from_api_converts_price(self) -> None:
        """Should read reais (number or string) into centavos."""
        gift = gift_from_api({"id": 7, "name": "Panela", "price": "249.90", "status": "RESERVED", "imageUrl": "x.png"})

        assert gift.id == "7"
        assert gift.price == 24990
        assert gift.is_available is False
        assert gift.image_url == "x.png"

    def test_gift_from_api_defaults(self) -> None:
        gift = gift_from_api({"id": "g1", "price": 10})
        assert gift.status == "AVAILABLE"
        assert gift.category is None

    def test_payload_sends_reais_without_quotas(self) -> None:
        """Should send price in reais and never a quota count."""
        payload = gift_payload("Panela", Money(24990), "Inox", "COZINHA")

        assert payload == {"name": "Panela", "description": "Inox", "price": 249.9, "category": "COZINHA"}

    def test_payload_includes_image_when_given(self) -> None:
        payload = gift_payload("Panela", Money(100), image_url="http://img")
        assert payload["imageUrl"] == "http://img"
