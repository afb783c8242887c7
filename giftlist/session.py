"""Signed-in session storage.

A Session is created on sign-in, removed on sign-out and read once when
the CLI starts. It is passed explicitly to every API call that needs a
bearer token.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from giftlist.config import get_config_dir


@dataclass(frozen=True)
class Session:
    """Bearer token plus the user it belongs to."""

    token: str
    user: dict[str, Any] = field(default_factory=dict)

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def get_session_path() -> Path:
    """Get the session file path (next to the config file)."""
    return get_config_dir() / "session.toml"


def sign_in(token: str, user: dict[str, Any], session_path: Path | None = None) -> Session:
    """Store a new session with secure permissions.

    Args:
        token: Bearer token returned by the backend.
        user: User fields (id, name, email). None values are dropped.
        session_path: Path to session file. If None, uses default location.

    Returns:
        The stored Session.
    """
    if session_path is None:
        session_path = get_session_path()

    session_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null
    clean_user = {k: v for k, v in user.items() if v is not None}

    with open(session_path, "wb") as f:
        tomli_w.dump({"token": token, "user": clean_user}, f)

    os.chmod(session_path, 0o600)

    return Session(token=token, user=clean_user)


def sign_out(session_path: Path | None = None) -> None:
    """Remove the stored session. Does nothing if there is none."""
    if session_path is None:
        session_path = get_session_path()

    session_path.unlink(missing_ok=True)


def load_session(session_path: Path | None = None) -> Session | None:
    """Rehydrate a previous session.

    Args:
        session_path: Path to session file. If None, uses default location.

    Returns:
        Session, or None if nothing is stored or the file has no token
        and user.

    Raises:
        tomllib.TOMLDecodeError: If the session file is corrupt.
    """
    if session_path is None:
        session_path = get_session_path()

    try:
        with open(session_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None

    token = data.get("token")
    user = data.get("user")
    if not token or not isinstance(user, dict):
        return None

    return Session(token=token, user=user)
