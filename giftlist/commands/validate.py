"""Offline commands: CPF check, date conversion and quota preview."""

import sys
from decimal import Decimal

from rich.console import Console
from rich.table import Table

from giftlist.commands.account import resolve_current_year
from giftlist.dates import date_to_iso, is_valid_date, iso_to_date, matches_date_pattern
from giftlist.domain.gifts import format_brl, parse_price, validate_gift_price
from giftlist.domain.quotas import quota_lines, split_quotas, validate_quota_count
from giftlist.domain.taxid import format_cpf, strip_cpf_formatting, validate_cpf

console = Console()


def cpf_command(value: str, format_only: bool = False) -> None:
    """Validate a CPF and show it in display form."""
    if format_only:
        console.print(format_cpf(value))
        return

    digits = strip_cpf_formatting(value)

    if validate_cpf(value):
        console.print(f"[green]✓[/green] CPF válido: {format_cpf(digits)}")
        console.print(f"[dim]Digits: {digits}[/dim]")
        return

    console.print(f"[red]CPF inválido: {value}[/red]", style="bold")
    if len(digits) != 11:
        console.print(f"[dim]Expected 11 digits, found {len(digits)}[/dim]")
    sys.exit(1)


def date_command(value: str, from_iso: bool = False) -> None:
    """Validate a DD/MM/YYYY date and show its ISO form, or the reverse."""
    if from_iso:
        try:
            console.print(iso_to_date(value))
        except ValueError:
            console.print(f"[red]Not an ISO 8601 date: {value}[/red]", style="bold")
            sys.exit(1)
        return

    if not matches_date_pattern(value):
        console.print("[red]Data deve estar no formato DD/MM/AAAA[/red]", style="bold")
        sys.exit(1)

    if not is_valid_date(value, resolve_current_year()):
        console.print(f"[red]Data inválida: {value}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {value} → {date_to_iso(value)}")


def quota_command(price_text: str, count: int = 1) -> None:
    """Preview how a gift price splits into quotas."""
    price = parse_price(price_text)
    if price is None:
        console.print(f"[red]Invalid price: {price_text}[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_gift_price(price)
    if not is_valid:
        console.print(f"[yellow]{error}[/yellow]")

    is_valid, error = validate_quota_count(count)
    if not is_valid:
        console.print(f"[yellow]{error}[/yellow]")

    split = split_quotas(Decimal(price) / 100, count)

    table = Table(title=f"{format_brl(price)} em {split.count} cota(s)")
    table.add_column("Cotas", justify="right", style="cyan")
    table.add_column("Valor", justify="right", style="green")

    for times, cents in quota_lines(split):
        table.add_row(f"{times}x", format_brl(cents))

    console.print(table)

    if split.has_remainder:
        console.print(f"[dim]A última cota absorve o resto de {format_brl(split.last_cents - split.base_cents)}[/dim]")
