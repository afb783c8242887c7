"""Pure functions for gifts and gift lists.

This module contains the functional core for list pages:
- No I/O operations (no HTTP, no console, no files)
- No side effects
- Pure data transformations

All monetary amounts are in centavos (Money type).
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from giftlist.domain.models import Money, Slug
from giftlist.domain.quotas import to_cents

# R$ 999.999,00
MAX_GIFT_PRICE = Money(99_999_900)

DEFAULT_CATEGORY = "OUTROS"

DEFAULT_EVENT_TYPES = {
    "CASAMENTO": "Casamento",
    "CHA_CASA_NOVA": "Chá de Casa Nova",
    "CHA_DE_BEBE": "Chá de Bebê",
    "ANIVERSARIO": "Aniversário",
    "OUTROS": "Outros",
}

SORT_ORDERS = ("default", "price-asc", "price-desc", "name")


class GiftStatus(str, Enum):
    """Reservation state reported by the backend."""

    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    PURCHASED = "PURCHASED"


@dataclass(frozen=True)
class Gift:
    """Immutable gift as shown on a list."""

    id: str
    name: str
    price: Money
    status: str = GiftStatus.AVAILABLE.value
    description: str | None = None
    category: str | None = None
    image_url: str | None = None

    @property
    def is_available(self) -> bool:
        return self.status == GiftStatus.AVAILABLE.value


@dataclass(frozen=True)
class ListProgress:
    """Immutable funding progress of a list."""

    total: Money
    raised: Money
    percent: int
    gift_count: int
    taken_count: int


def gift_from_api(data: dict[str, Any]) -> Gift:
    """Build a Gift from a backend JSON object.

    Args:
        data: Gift object with price in reais.

    Returns:
        Gift with price in centavos.
    """
    return Gift(
        id=str(data["id"]),
        name=data.get("name", ""),
        price=to_cents(data.get("price", 0)),
        status=data.get("status", GiftStatus.AVAILABLE.value),
        description=data.get("description"),
        category=data.get("category"),
        image_url=data.get("imageUrl"),
    )


def parse_price(text: str) -> Money | None:
    """Parse a price typed in reais.

    Accepts "150", "150.5", "150,50", "1.234,56" and "R$ 1.234,56".
    A lone dot is a decimal point, as in "150.5".

    Args:
        text: Price as typed.

    Returns:
        Price in centavos, or None if invalid or negative.
    """
    cleaned = text.replace("R$", "").strip().replace(" ", "")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not value.is_finite() or value < 0:
        return None

    return to_cents(value)


def validate_gift_price(price: Money) -> tuple[bool, str | None]:
    """Validate a gift price.

    Args:
        price: Price in centavos.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if price <= 0:
        return False, "O valor do presente deve ser positivo"

    if price > MAX_GIFT_PRICE:
        return False, "O valor máximo para um presente é de R$ 999.999,00"

    return True, None


def format_brl(amount: Money) -> str:
    """Format centavos as Brazilian reais, e.g. R$ 1.234,56."""
    sign = "-" if amount < 0 else ""
    reais, centavos = divmod(abs(amount), 100)
    grouped = f"{reais:,}".replace(",", ".")
    return f"{sign}R$ {grouped},{centavos:02d}"


def slugify(text: str) -> Slug:
    """Normalize text into a public list slug.

    Lower-cases, turns whitespace runs into "-" and drops anything else
    outside a-z, 0-9 and "-". Accented letters are dropped, not folded.
    """
    slug = re.sub(r"\s+", "-", text.lower())
    return Slug(re.sub(r"[^a-z0-9-]", "", slug))


def event_type_id(label: str) -> str:
    """Identifier for a custom event type, e.g. "Bodas de Prata" -> "BODAS_DE_PRATA"."""
    return re.sub(r"\s+", "_", label.strip().upper())


def resolve_event_type(label: str) -> str:
    """Identifier for a typed event type.

    A default type matches by id or by label, ignoring case and extra
    spaces, so "chá de casa nova" and "cha_casa_nova" both give
    "CHA_CASA_NOVA". Anything else becomes a custom id via event_type_id.

    Args:
        label: Event type as typed.

    Returns:
        Event type identifier to send to the backend.
    """
    wanted = " ".join(label.split()).casefold()
    for type_id, type_label in DEFAULT_EVENT_TYPES.items():
        if wanted in (type_id.casefold(), type_label.casefold()):
            return type_id
    return event_type_id(label)


def list_progress(gifts: list[Gift]) -> ListProgress:
    """Calculate how much of a list has been funded.

    A gift counts as raised once its status is anything but AVAILABLE.

    Args:
        gifts: Gifts on the list.

    Returns:
        ListProgress with percent rounded to the nearest integer.
    """
    total = sum(g.price for g in gifts)
    taken = [g for g in gifts if not g.is_available]
    raised = sum(g.price for g in taken)

    if total <= 0:
        percent = 0
    else:
        # round(raised * 100 / total) with halves rounding up
        percent = (2 * raised * 100 + total) // (2 * total)

    return ListProgress(
        total=Money(total),
        raised=Money(raised),
        percent=percent,
        gift_count=len(gifts),
        taken_count=len(taken),
    )


def gift_categories(gifts: list[Gift]) -> list[str]:
    """Distinct gift categories in first-seen order, missing ones as OUTROS."""
    seen: dict[str, None] = {}
    for gift in gifts:
        seen.setdefault(gift.category or DEFAULT_CATEGORY, None)
    return list(seen)


def filter_by_category(gifts: list[Gift], category: str | None) -> list[Gift]:
    """Gifts in a category. None keeps every gift."""
    if category is None:
        return list(gifts)
    return [g for g in gifts if (g.category or DEFAULT_CATEGORY) == category]


def sort_gifts(gifts: list[Gift], order: str = "default") -> list[Gift]:
    """Sort gifts for display.

    Args:
        gifts: Gifts to sort.
        order: "price-asc", "price-desc", "name", or "default" which puts
            available gifts first and otherwise keeps list order.

    Returns:
        New sorted list.

    Raises:
        ValueError: If order is unknown.
    """
    if order == "price-asc":
        return sorted(gifts, key=lambda g: g.price)
    if order == "price-desc":
        return sorted(gifts, key=lambda g: g.price, reverse=True)
    if order == "name":
        return sorted(gifts, key=lambda g: g.name.casefold())
    if order == "default":
        return sorted(gifts, key=lambda g: not g.is_available)

    raise ValueError(f"Unknown sort order: {order}")


def gift_payload(
    name: str,
    price: Money,
    description: str = "",
    category: str = DEFAULT_CATEGORY,
    image_url: str | None = None,
) -> dict[str, Any]:
    """Body for creating or updating a gift.

    Price goes out in reais. The quota count is not part of the body.
    """
    payload: dict[str, Any] = {
        "name": name,
        "description": description,
        "price": price / 100,
        "category": category,
    }
    if image_url:
        payload["imageUrl"] = image_url
    return payload
