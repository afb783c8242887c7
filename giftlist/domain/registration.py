"""Pure validation for the account registration form.

Messages are in Portuguese, as users see them.
"""

import re
from dataclasses import dataclass
from typing import Any

from giftlist.dates import date_to_iso, is_valid_date, matches_date_pattern
from giftlist.domain.taxid import matches_cpf_pattern, strip_cpf_formatting, validate_cpf

MIN_PASSWORD_LENGTH = 6

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class RegistrationForm:
    """Registration form fields as typed."""

    name: str
    email: str
    cpf: str
    birth_date: str
    password: str
    confirm_password: str


def _cpf_error(cpf: str) -> str | None:
    if not cpf:
        return "CPF é obrigatório"
    if not matches_cpf_pattern(cpf):
        return "CPF deve estar no formato XXX.XXX.XXX-XX"
    if not validate_cpf(cpf):
        return "CPF inválido"
    return None


def _birth_date_error(birth_date: str, current_year: int | None) -> str | None:
    if not birth_date:
        return "Data de nascimento é obrigatória"
    if not matches_date_pattern(birth_date):
        return "Data deve estar no formato DD/MM/AAAA"
    if not is_valid_date(birth_date, current_year):
        return "Data inválida"
    return None


def _email_error(email: str) -> str | None:
    if not email:
        return "Email é obrigatório"
    if not _EMAIL.match(email):
        return "Email inválido"
    return None


def validate_registration(form: RegistrationForm, current_year: int | None = None) -> dict[str, str]:
    """Validate every registration field.

    Args:
        form: Form values.
        current_year: Latest accepted birth year. Defaults to this year.

    Returns:
        Mapping of field name to its first error message. Empty if valid.
    """
    errors: dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = "Nome completo é obrigatório"

    email_error = _email_error(form.email)
    if email_error:
        errors["email"] = email_error

    cpf_error = _cpf_error(form.cpf)
    if cpf_error:
        errors["cpf"] = cpf_error

    birth_date_error = _birth_date_error(form.birth_date, current_year)
    if birth_date_error:
        errors["birth_date"] = birth_date_error

    if len(form.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres"

    if not form.confirm_password:
        errors["confirm_password"] = "Confirmação de senha é obrigatória"
    elif form.password != form.confirm_password:
        errors["confirm_password"] = "As senhas não coincidem"

    return errors


def build_registration_payload(form: RegistrationForm) -> dict[str, Any]:
    """Body for the account registration request.

    Call validate_registration first; the birth date is converted without
    further checks.

    Args:
        form: Validated form values.

    Returns:
        Dictionary with name, email, cpf (digits only), birthDate (ISO
        instant) and password.
    """
    return {
        "name": form.name.strip(),
        "email": form.email,
        "cpf": strip_cpf_formatting(form.cpf),
        "birthDate": date_to_iso(form.birth_date),
        "password": form.password,
    }
