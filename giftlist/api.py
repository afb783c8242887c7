"""Gift registry backend API interactions."""

from typing import Any

import requests

from giftlist.session import Session

TIMEOUT_SECONDS = 10


def _headers(session: Session | None = None) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if session is not None:
        headers.update(session.auth_header)
    return headers


def _request(
    method: str,
    base_url: str,
    path: str,
    session: Session | None = None,
    json: dict[str, Any] | None = None,
) -> Any:
    """Send a request and decode the JSON reply.

    Raises:
        requests.RequestException: If the request fails or the status is
            not 2xx.
    """
    response = requests.request(
        method,
        f"{base_url}{path}",
        headers=_headers(session),
        json=json,
        timeout=TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    if not response.content:
        return None
    return response.json()


def api_error_message(exc: requests.RequestException, fallback: str) -> str:
    """Message to show for a failed request.

    Args:
        exc: Exception raised by a request.
        fallback: Text used when the backend sent no message.

    Returns:
        The backend's "message" field if there is one, otherwise fallback.
    """
    response = exc.response
    if response is None:
        return fallback
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


def login(base_url: str, email: str, password: str) -> dict[str, Any]:
    """Create a session.

    Args:
        base_url: Backend base URL.
        email: Account email.
        password: Account password.

    Returns:
        Dictionary with token, id, name and email.

    Raises:
        requests.RequestException: If API request fails.
    """
    return _request("POST", base_url, "/auth/login", json={"email": email, "password": password})


def register(base_url: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Create an account.

    Args:
        base_url: Backend base URL.
        payload: Body from build_registration_payload.

    Returns:
        Dictionary with token, id, name and email.

    Raises:
        requests.RequestException: If API request fails.
    """
    return _request("POST", base_url, "/register", json=payload)


def get_profile(base_url: str, session: Session) -> dict[str, Any]:
    """Fetch the signed-in user's profile (name, email, cpf, birthDate)."""
    return _request("GET", base_url, "/profile", session)


def update_profile(base_url: str, session: Session, changes: dict[str, Any]) -> dict[str, Any]:
    """Patch profile fields.

    Args:
        base_url: Backend base URL.
        session: Signed-in session.
        changes: Any of name, cpf (digits) and birthDate (ISO instant).

    Returns:
        The updated profile.

    Raises:
        requests.RequestException: If API request fails.
    """
    return _request("PATCH", base_url, "/profile", session, json=changes)


def get_lists(base_url: str, session: Session) -> list[dict[str, Any]]:
    """Fetch the signed-in user's lists, gifts included."""
    return _request("GET", base_url, "/lists", session)


def get_list(base_url: str, session: Session, list_id: str) -> dict[str, Any]:
    """Fetch one of the signed-in user's lists."""
    return _request("GET", base_url, f"/lists/{list_id}", session)


def create_list(
    base_url: str,
    session: Session,
    title: str,
    slug: str,
    description: str | None = None,
    event_date: str | None = None,
    event_type: str | None = None,
) -> dict[str, Any]:
    """Create a gift list.

    Args:
        base_url: Backend base URL.
        session: Signed-in session.
        title: List title.
        slug: Public URL slug.
        description: Optional description.
        event_date: Optional event date as sent by the form.
        event_type: Optional event type identifier.

    Returns:
        Created list, including its id.

    Raises:
        requests.RequestException: If API request fails (e.g. slug taken).
    """
    body = {
        "title": title,
        "slug": slug,
        "description": description,
        "eventDate": event_date,
        "eventType": event_type,
    }
    return _request("POST", base_url, "/lists", session, json={k: v for k, v in body.items() if v})


def update_list(base_url: str, session: Session, list_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """Patch list fields such as isPrivate, title or description."""
    return _request("PATCH", base_url, f"/lists/{list_id}", session, json=changes)


def add_gift(base_url: str, session: Session, list_id: str, gift: dict[str, Any]) -> dict[str, Any]:
    """Add a gift (body from gift_payload) to a list."""
    return _request("POST", base_url, f"/lists/{list_id}/gifts", session, json=gift)


def update_gift(base_url: str, session: Session, gift_id: str, gift: dict[str, Any]) -> dict[str, Any]:
    """Replace a gift's fields."""
    return _request("PUT", base_url, f"/gifts/{gift_id}", session, json=gift)


def delete_gift(base_url: str, session: Session, gift_id: str) -> None:
    """Delete a gift."""
    _request("DELETE", base_url, f"/gifts/{gift_id}", session)


def get_public_list(base_url: str, slug: str) -> dict[str, Any]:
    """Fetch a shared list by slug. No session needed."""
    return _request("GET", base_url, f"/public/lists/{slug}")


def purchase_gift(base_url: str, gift_id: str) -> dict[str, Any]:
    """Reserve a gift as a guest. The backend handles concurrent reservations."""
    return _request("PATCH", base_url, f"/public/gifts/{gift_id}/purchase")
