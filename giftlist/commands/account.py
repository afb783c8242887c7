"""Account commands: init, register, login, logout, whoami and profile."""

import sys
from pathlib import Path
from typing import Any, NoReturn

import requests
from rich.console import Console

from giftlist import api
from giftlist.config import create_default_config, get_api_url, get_config_path, get_current_year
from giftlist.dates import date_to_iso, is_valid_date, iso_to_date
from giftlist.domain.registration import RegistrationForm, build_registration_payload, validate_registration
from giftlist.domain.taxid import format_cpf, strip_cpf_formatting, validate_cpf
from giftlist.session import Session, get_session_path, load_session, sign_in, sign_out

console = Console()

FIELD_LABELS = {
    "name": "Nome",
    "email": "Email",
    "cpf": "CPF",
    "birth_date": "Data de nascimento",
    "password": "Senha",
    "confirm_password": "Confirmação de senha",
}


def _unreadable(path: Path, e: ValueError, hint: str) -> NoReturn:
    console.print(f"[red]Cannot read {path}[/red]", style="bold")
    console.print(f"[red]{e}[/red]")
    console.print(f"\n[yellow]{hint}[/yellow]")
    sys.exit(1)


def resolve_api_url() -> str:
    """Backend URL from the environment or config, exiting on a broken config."""
    try:
        return get_api_url()
    except ValueError as e:
        # tomllib.TOMLDecodeError is a ValueError
        _unreadable(get_config_path(), e, "Fix the file or run 'giftlist init --force'")


def resolve_current_year() -> int | None:
    """Pinned year from the config, exiting on a broken config."""
    try:
        return get_current_year()
    except ValueError as e:
        _unreadable(get_config_path(), e, "Fix the file or run 'giftlist init --force'")


def stored_session() -> Session | None:
    """Load the stored session, exiting if the file is corrupt."""
    try:
        return load_session()
    except ValueError as e:
        _unreadable(get_session_path(), e, "Run 'giftlist logout' and sign in again")


def require_session() -> Session:
    """Load the stored session or exit.

    Raises:
        SystemExit: If nobody is signed in or the session file is corrupt.
    """
    session = stored_session()
    if session is None:
        console.print("[red]Not signed in. Run 'giftlist login' first.[/red]", style="bold")
        sys.exit(1)
    return session


def init_command(api_url: str | None = None, force: bool = False) -> None:
    """Create the config file."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[red]Config already exists: {config_path}[/red]", style="bold")
        console.print("\n[yellow]Use 'giftlist init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        if api_url:
            create_default_config(config_path, api_url=api_url.rstrip("/"))
        else:
            create_default_config(config_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Config file created (permissions: 600)")
    console.print(f"[dim]Config: {config_path}[/dim]")


def _start_session(data: dict) -> None:
    user = {"id": data.get("id"), "name": data.get("name"), "email": data.get("email")}
    session = sign_in(data["token"], user)
    console.print(f"[green]✓[/green] Signed in as {session.user.get('name') or session.user.get('email')}")


def register_command(form: RegistrationForm) -> None:
    """Validate the registration form and create the account."""
    errors = validate_registration(form, resolve_current_year())
    if errors:
        console.print("[red]Registration failed:[/red]", style="bold")
        for field, message in errors.items():
            console.print(f"  {FIELD_LABELS[field]}: {message}")
        sys.exit(1)

    payload = build_registration_payload(form)

    try:
        data = api.register(resolve_api_url(), payload)
        _start_session(data)
    except requests.RequestException as e:
        console.print(f"[red]{api.api_error_message(e, 'Registration failed')}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not store session: {e}[/red]", style="bold")
        sys.exit(1)


def login_command(email: str, password: str) -> None:
    """Sign in and store the session."""
    try:
        data = api.login(resolve_api_url(), email, password)
        _start_session(data)
    except requests.RequestException as e:
        console.print(f"[red]{api.api_error_message(e, 'Login failed')}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not store session: {e}[/red]", style="bold")
        sys.exit(1)


def logout_command() -> None:
    """Forget the stored session."""
    try:
        sign_out()
    except OSError as e:
        console.print(f"[red]Could not remove session: {e}[/red]", style="bold")
        sys.exit(1)
    console.print("[green]✓[/green] Signed out")


def whoami_command() -> None:
    """Show the signed-in user."""
    session = stored_session()
    if session is None:
        console.print("[yellow]Not signed in[/yellow]")
        return

    console.print(f"Name:  {session.user.get('name', '-')}")
    console.print(f"Email: {session.user.get('email', '-')}")
    console.print(f"[dim]Session: {get_session_path()}[/dim]")


def _profile_changes(name: str | None, cpf: str | None, birth_date: str | None) -> dict[str, Any]:
    changes: dict[str, Any] = {}

    if name is not None:
        if not name.strip():
            console.print("[red]Nome completo é obrigatório[/red]", style="bold")
            sys.exit(1)
        changes["name"] = name.strip()

    if cpf is not None:
        if not validate_cpf(cpf):
            console.print("[red]CPF inválido[/red]", style="bold")
            sys.exit(1)
        changes["cpf"] = strip_cpf_formatting(cpf)

    if birth_date is not None:
        if not is_valid_date(birth_date, resolve_current_year()):
            console.print(f"[red]Data inválida: {birth_date}[/red]", style="bold")
            sys.exit(1)
        changes["birthDate"] = date_to_iso(birth_date)

    return changes


def _print_profile(profile: dict[str, Any]) -> None:
    birth_date = profile.get("birthDate")
    try:
        shown_birth_date = iso_to_date(birth_date) if birth_date else "-"
    except ValueError:
        shown_birth_date = str(birth_date)

    console.print(f"Name:       {profile.get('name') or '-'}")
    console.print(f"Email:      {profile.get('email') or '-'}")
    console.print(f"CPF:        {format_cpf(profile['cpf']) if profile.get('cpf') else '-'}")
    console.print(f"Birth date: {shown_birth_date}")


def profile_command(name: str | None = None, cpf: str | None = None, birth_date: str | None = None) -> None:
    """Show the signed-in user's profile, or update it when fields are given."""
    session = require_session()
    changes = _profile_changes(name, cpf, birth_date)

    try:
        if changes:
            profile = api.update_profile(resolve_api_url(), session, changes)
        else:
            profile = api.get_profile(resolve_api_url(), session)
    except requests.RequestException as e:
        fallback = "Erro ao salvar perfil." if changes else "Could not load profile"
        console.print(f"[red]{api.api_error_message(e, fallback)}[/red]", style="bold")
        sys.exit(1)

    if changes:
        # Keep the name shown by whoami in step with the backend
        if profile.get("name"):
            try:
                sign_in(session.token, {**session.user, "name": profile["name"]})
            except OSError as e:
                console.print(f"[yellow]Could not update stored session: {e}[/yellow]")
        console.print("[green]✓[/green] Profile updated")

    _print_profile(profile)
