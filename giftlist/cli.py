"""CLI entry point for giftlist."""

from typing import Optional

import typer

from giftlist.commands.account import (
    init_command,
    login_command,
    logout_command,
    profile_command,
    register_command,
    whoami_command,
)
from giftlist.commands.lists import (
    add_gift_command,
    create_list_command,
    delete_gift_command,
    edit_gift_command,
    edit_list_command,
    lists_command,
    privacy_command,
    public_command,
    purchase_command,
    show_list_command,
)
from giftlist.commands.validate import cpf_command, date_command, quota_command
from giftlist.domain.registration import RegistrationForm

app = typer.Typer(
    name="giftlist",
    help="Gift registry client - build gift lists and share them with your guests",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Gift registry client - build gift lists and share them with your guests."""
    pass


@app.command(name="init")
def init(
    api_url: str = typer.Option(None, "--api-url", help="Backend base URL"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Create the giftlist configuration file."""
    init_command(api_url, force)


@app.command()
def cpf(
    value: str,
    format_only: bool = typer.Option(False, "--format", help="Only print the XXX.XXX.XXX-XX form"),
) -> None:
    """Check a CPF's check digits."""
    cpf_command(value, format_only)


@app.command()
def date(
    value: str,
    from_iso: bool = typer.Option(False, "--from-iso", help="Convert an ISO 8601 instant to DD/MM/YYYY"),
) -> None:
    """Validate a DD/MM/YYYY date and show the ISO instant sent to the backend."""
    date_command(value, from_iso)


@app.command()
def quota(
    price: str,
    count: int = typer.Option(1, "--count", "-n", help="Number of quotas"),
) -> None:
    """Preview how a gift price splits into quotas."""
    quota_command(price, count)


@app.command()
def register(
    name: str = typer.Option(..., prompt="Nome completo"),
    email: str = typer.Option(..., prompt="Email"),
    cpf: str = typer.Option(..., prompt="CPF (XXX.XXX.XXX-XX)"),
    birth_date: str = typer.Option(..., "--birth-date", prompt="Data de nascimento (DD/MM/AAAA)"),
    password: str = typer.Option(..., prompt="Senha", hide_input=True),
    confirm_password: str = typer.Option(..., "--confirm-password", prompt="Confirme a senha", hide_input=True),
) -> None:
    """Create your account."""
    register_command(RegistrationForm(name, email, cpf, birth_date, password, confirm_password))


@app.command()
def login(
    email: str = typer.Option(..., prompt="Email"),
    password: str = typer.Option(..., prompt="Senha", hide_input=True),
) -> None:
    """Sign in to your account."""
    login_command(email, password)


@app.command()
def logout() -> None:
    """Sign out of your account."""
    logout_command()


@app.command()
def whoami() -> None:
    """Show who is signed in."""
    whoami_command()


@app.command()
def profile(
    name: str = typer.Option(None, "--name", help="New full name"),
    cpf: str = typer.Option(None, "--cpf", help="New CPF"),
    birth_date: str = typer.Option(None, "--birth-date", help="New birth date (DD/MM/YYYY)"),
) -> None:
    """Show your profile, or update it with the given fields."""
    profile_command(name, cpf, birth_date)


@app.command(name="lists")
def lists() -> None:
    """List your gift lists and how much each has raised."""
    lists_command()


@app.command(name="list")
def show_list(list_id: str) -> None:
    """Show one of your lists with all its gifts."""
    show_list_command(list_id)


@app.command(name="create-list")
def create_list(
    title: str,
    slug: str = typer.Option(None, "--slug", help="Public link (default: from title)"),
    description: str = typer.Option(None, "--description", "-d", help="List description"),
    event_date: str = typer.Option(None, "--event-date", help="Event date"),
    event_type: str = typer.Option(None, "--event-type", help="Casamento, Chá de Bebê, ... or your own"),
) -> None:
    """Create a new gift list."""
    create_list_command(title, slug, description, event_date, event_type)


@app.command(name="edit-list")
def edit_list(
    list_id: str,
    title: str = typer.Option(None, "--title", help="New title"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    event_date: str = typer.Option(None, "--event-date", help="New event date"),
    event_type: str = typer.Option(None, "--event-type", help="Casamento, Chá de Bebê, ... or your own"),
    private: Optional[bool] = typer.Option(None, "--private/--public", help="Hide the list from guests, or share it"),
) -> None:
    """Change a list's title, description, event or privacy."""
    edit_list_command(list_id, title, description, event_date, event_type, private)


@app.command()
def privacy(list_id: str) -> None:
    """Toggle a list between public and private."""
    privacy_command(list_id)


@app.command(name="add-gift")
def add_gift(
    list_id: str,
    name: str,
    price: str,
    description: str = typer.Option("", "--description", "-d", help="Gift description"),
    category: str = typer.Option("OUTROS", "--category", "-c", help="Gift category"),
    image_url: str = typer.Option(None, "--image-url", help="Gift image URL"),
    quotas: int = typer.Option(1, "--quotas", "-n", help="Number of quotas (1-30)"),
) -> None:
    """Add a gift to one of your lists."""
    add_gift_command(list_id, name, price, description, category, image_url, quotas)


@app.command(name="edit-gift")
def edit_gift(
    list_id: str,
    gift_id: str,
    name: str = typer.Option(None, "--name", help="New gift name"),
    price: str = typer.Option(None, "--price", "-p", help="New price in reais"),
    description: str = typer.Option(None, "--description", "-d", help="New description"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    image_url: str = typer.Option(None, "--image-url", help="New image URL"),
    quotas: Optional[int] = typer.Option(None, "--quotas", "-n", help="Number of quotas (default: one per R$ 100)"),
) -> None:
    """Change a gift on one of your lists."""
    edit_gift_command(list_id, gift_id, name, price, description, category, image_url, quotas)


@app.command(name="delete-gift")
def delete_gift(
    gift_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Remove a gift from one of your lists."""
    delete_gift_command(gift_id, yes)


@app.command()
def public(
    slug: str,
    sort: str = typer.Option("default", "--sort", help="default, price-asc, price-desc or name"),
    category: str = typer.Option(None, "--category", "-c", help="Only show this category"),
) -> None:
    """Show a shared list as your guests see it."""
    public_command(slug, sort, category)


@app.command()
def purchase(gift_id: str) -> None:
    """Reserve a gift from a shared list."""
    purchase_command(gift_id)


if __name__ == "__main__":
    app()
