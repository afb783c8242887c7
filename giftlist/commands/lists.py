"""List and gift commands backed by the API."""

import sys
from decimal import Decimal
from typing import Any, NoReturn

import requests
import typer
from rich.console import Console
from rich.table import Table

from giftlist import api
from giftlist.commands.account import require_session, resolve_api_url
from giftlist.dates import iso_to_date
from giftlist.domain.gifts import (
    DEFAULT_CATEGORY,
    DEFAULT_EVENT_TYPES,
    SORT_ORDERS,
    Gift,
    ListProgress,
    filter_by_category,
    format_brl,
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
from giftlist.domain.quotas import quota_lines, split_quotas, suggest_quota_count, validate_quota_count

console = Console()


def _fail(e: requests.RequestException, fallback: str) -> NoReturn:
    console.print(f"[red]{api.api_error_message(e, fallback)}[/red]", style="bold")
    sys.exit(1)


def _privacy_label(gift_list: dict[str, Any]) -> str:
    return "Privada" if gift_list.get("isPrivate") else "Pública"


def _event_type_arg(event_type: str | None) -> str | None:
    if not event_type:
        return None
    type_id = resolve_event_type(event_type)
    if type_id not in DEFAULT_EVENT_TYPES:
        console.print(f"[dim]Custom event type: {type_id}[/dim]")
    return type_id


def _checked_price(price_text: str) -> Money:
    price = parse_price(price_text)
    if price is None:
        console.print(f"[red]Invalid price: {price_text}[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_gift_price(price)
    if not is_valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    return price


def _checked_quotas(quotas: int) -> int:
    is_valid, error = validate_quota_count(quotas)
    if not is_valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)
    return quotas


def _print_quota_preview(price: Money, quotas: int) -> None:
    split = split_quotas(Decimal(price) / 100, quotas)
    for times, cents in quota_lines(split):
        console.print(f"  [dim]{times}x de {format_brl(cents)}[/dim]")


def _print_progress(progress: ListProgress) -> None:
    console.print(
        f"Arrecadado: [green]{format_brl(progress.raised)}[/green] de {format_brl(progress.total)} "
        f"({progress.percent}%), {progress.taken_count}/{progress.gift_count} presentes\n"
    )


def _gift_table(gifts: list[Gift]) -> Table:
    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Gift", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Price", justify="right")
    table.add_column("Status", justify="center")

    for gift in gifts:
        status = "[green]○[/green]" if gift.is_available else "✓"
        table.add_row(gift.id, gift.name, gift.category or DEFAULT_CATEGORY, format_brl(gift.price), status)

    return table


def lists_command() -> None:
    """Show the signed-in user's lists with funding progress."""
    session = require_session()

    try:
        lists = api.get_lists(resolve_api_url(), session)
    except requests.RequestException as e:
        _fail(e, "Could not load lists")

    if not lists:
        console.print("[yellow]No lists yet. Create one with 'giftlist create-list'.[/yellow]")
        return

    table = Table(title=f"Lists ({len(lists)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="white")
    table.add_column("Slug", style="cyan")
    table.add_column("Privacy")
    table.add_column("Gifts", justify="right")
    table.add_column("Raised", justify="right", style="green")
    table.add_column("Total", justify="right")
    table.add_column("%", justify="right", style="magenta")

    for gift_list in lists:
        progress = list_progress([gift_from_api(g) for g in gift_list.get("gifts", [])])
        table.add_row(
            str(gift_list["id"]),
            gift_list.get("title", ""),
            gift_list.get("slug", ""),
            _privacy_label(gift_list),
            str(progress.gift_count),
            format_brl(progress.raised),
            format_brl(progress.total),
            f"{progress.percent}%",
        )

    console.print(table)


def show_list_command(list_id: str) -> None:
    """Show one of the signed-in user's lists with all its gifts."""
    session = require_session()

    try:
        data = api.get_list(resolve_api_url(), session, list_id)
    except requests.RequestException as e:
        _fail(e, f"List {list_id} not found")

    gifts = [gift_from_api(g) for g in data.get("gifts", [])]

    console.print(f"\n[bold]{data.get('title', '')}[/bold] [dim]({_privacy_label(data)})[/dim]")
    if data.get("slug"):
        console.print(f"[cyan]/{data['slug']}[/cyan]")
    if data.get("description"):
        console.print(f"[dim]{data['description']}[/dim]")

    event_type = data.get("eventType")
    if event_type:
        console.print(f"Evento: {DEFAULT_EVENT_TYPES.get(event_type, event_type)}")
    event_date = data.get("eventDate")
    if event_date:
        try:
            console.print(f"Data: {iso_to_date(event_date)}")
        except ValueError:
            console.print(f"Data: {event_date}")

    _print_progress(list_progress(gifts))

    if not gifts:
        console.print("[yellow]No gifts yet. Add one with 'giftlist add-gift'.[/yellow]")
        return

    console.print(_gift_table(gifts))


def create_list_command(
    title: str,
    slug: str | None = None,
    description: str | None = None,
    event_date: str | None = None,
    event_type: str | None = None,
) -> None:
    """Create a gift list; the slug defaults to the slugified title."""
    session = require_session()

    final_slug = slugify(slug if slug else title)
    if not final_slug:
        console.print("[red]Slug is empty after normalization[/red]", style="bold")
        sys.exit(1)

    type_id = _event_type_arg(event_type)

    try:
        created = api.create_list(resolve_api_url(), session, title, final_slug, description, event_date, type_id)
    except requests.RequestException as e:
        _fail(e, "Erro ao criar lista. O link (slug) pode já estar em uso.")

    console.print(f"[green]✓[/green] List created: {created.get('title', title)}")
    console.print(f"[dim]ID: {created.get('id')}  Slug: {final_slug}[/dim]")


def edit_list_command(
    list_id: str,
    title: str | None = None,
    description: str | None = None,
    event_date: str | None = None,
    event_type: str | None = None,
    private: bool | None = None,
) -> None:
    """Change a list's details; only the given fields are sent."""
    changes: dict[str, Any] = {}
    if title is not None:
        if not title.strip():
            console.print("[red]Title cannot be empty[/red]", style="bold")
            sys.exit(1)
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if event_date:
        changes["eventDate"] = event_date
    if event_type:
        changes["eventType"] = _event_type_arg(event_type)
    if private is not None:
        changes["isPrivate"] = private

    if not changes:
        console.print("[yellow]Nothing to change. Pass --title, --description, --private or another option.[/yellow]")
        return

    session = require_session()

    try:
        api.update_list(resolve_api_url(), session, list_id, changes)
    except requests.RequestException as e:
        _fail(e, "Erro ao salvar alterações.")

    console.print(f"[green]✓[/green] List {list_id} updated")
    if private is not None:
        console.print(f"[dim]Privacy: {'Privada' if private else 'Pública'}[/dim]")


def privacy_command(list_id: str) -> None:
    """Flip a list between public and private."""
    session = require_session()
    base_url = resolve_api_url()

    try:
        data = api.get_list(base_url, session, list_id)
        private = not data.get("isPrivate", False)
        api.update_list(base_url, session, list_id, {"isPrivate": private})
    except requests.RequestException as e:
        _fail(e, "Failed to update privacy settings.")

    console.print(f"[green]✓[/green] {data.get('title', list_id)} is now {'Privada' if private else 'Pública'}")


def add_gift_command(
    list_id: str,
    name: str,
    price_text: str,
    description: str = "",
    category: str = DEFAULT_CATEGORY,
    image_url: str | None = None,
    quotas: int = 1,
) -> None:
    """Add a gift to a list, previewing its quota split."""
    price = _checked_price(price_text)
    _checked_quotas(quotas)

    session = require_session()
    payload = gift_payload(name, price, description, category.strip() or DEFAULT_CATEGORY, image_url)

    try:
        api.add_gift(resolve_api_url(), session, list_id, payload)
    except requests.RequestException as e:
        _fail(e, "Failed to save gift.")

    console.print(f"[green]✓[/green] Gift added: {name} ({format_brl(price)})")
    _print_quota_preview(price, quotas)


def _find_gift(data: dict[str, Any], gift_id: str) -> Gift | None:
    for raw in data.get("gifts", []):
        if str(raw.get("id")) == gift_id:
            return gift_from_api(raw)
    return None


def edit_gift_command(
    list_id: str,
    gift_id: str,
    name: str | None = None,
    price_text: str | None = None,
    description: str | None = None,
    category: str | None = None,
    image_url: str | None = None,
    quotas: int | None = None,
) -> None:
    """Replace a gift's fields, keeping the current value of any field not given.

    The quota count is not stored, so without --quotas the preview starts
    from one quota per R$ 100 of the gift's current price.
    """
    new_price = _checked_price(price_text) if price_text is not None else None
    if quotas is not None:
        _checked_quotas(quotas)

    session = require_session()
    base_url = resolve_api_url()

    try:
        data = api.get_list(base_url, session, list_id)
    except requests.RequestException as e:
        _fail(e, f"List {list_id} not found")

    current = _find_gift(data, gift_id)
    if current is None:
        console.print(f"[red]Gift {gift_id} is not on list {list_id}[/red]", style="bold")
        sys.exit(1)

    if quotas is None:
        quotas = suggest_quota_count(current.price)

    price = new_price if new_price is not None else current.price
    final_name = name if name is not None else current.name
    final_category = (category if category is not None else current.category or "").strip() or DEFAULT_CATEGORY
    payload = gift_payload(
        final_name,
        price,
        description if description is not None else current.description or "",
        final_category,
        image_url if image_url is not None else current.image_url,
    )

    try:
        api.update_gift(base_url, session, gift_id, payload)
    except requests.RequestException as e:
        _fail(e, "Failed to save gift.")

    console.print(f"[green]✓[/green] Gift updated: {final_name} ({format_brl(price)})")
    _print_quota_preview(price, quotas)


def delete_gift_command(gift_id: str, yes: bool = False) -> None:
    """Remove a gift after confirmation."""
    session = require_session()

    if not yes and not typer.confirm("Tem certeza que deseja remover este presente?", default=False):
        console.print("[yellow]Cancelled[/yellow]")
        return

    try:
        api.delete_gift(resolve_api_url(), session, gift_id)
    except requests.RequestException as e:
        _fail(e, "Falha ao excluir o presente.")

    console.print(f"[green]✓[/green] Gift {gift_id} removed")


def _render_public_list(data: dict[str, Any], sort: str, category: str | None) -> None:
    gifts = [gift_from_api(g) for g in data.get("gifts", [])]

    console.print(f"\n[bold]{data.get('title', '')}[/bold]")
    if data.get("description"):
        console.print(f"[dim]{data['description']}[/dim]")
    _print_progress(list_progress(gifts))

    shown = sort_gifts(filter_by_category(gifts, category), sort)
    if not shown:
        console.print("[yellow]No gifts to show[/yellow]")
        return

    console.print(_gift_table(shown))


def public_command(slug: str, sort: str = "default", category: str | None = None) -> None:
    """Show a shared list as guests see it."""
    if sort not in SORT_ORDERS:
        console.print(f"[red]Unknown sort order: {sort}. Use one of: {', '.join(SORT_ORDERS)}[/red]", style="bold")
        sys.exit(1)

    try:
        data = api.get_public_list(resolve_api_url(), slugify(slug))
    except requests.RequestException as e:
        _fail(e, f"List '{slug}' not found")

    _render_public_list(data, sort, category)


def purchase_command(gift_id: str) -> None:
    """Reserve a gift as a guest."""
    try:
        api.purchase_gift(resolve_api_url(), gift_id)
    except requests.RequestException as e:
        _fail(e, "Could not reserve gift")

    console.print(f"[green]✓[/green] Gift {gift_id} reserved. Obrigado!")
