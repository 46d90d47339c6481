# This project was developed with assistance from AI tools.
"""Request payload validation for companies and login.

Pure functions. Each predicate returns ``(ok, error)`` where ``error`` is an
empty string on success. The aggregate checks stop at the first failing rule
and return that single message.
"""

import math
import re
from typing import Any

# ASCII digits only
ATECO_RE = re.compile(r"\d{2}\.\d{2}\.\d{2}", re.ASCII)
_ID_RE = re.compile(r"\d+", re.ASCII)

SOCIETA_FIELDS = (
    "nome",
    "fatturato",
    "ebitda",
    "regione",
    "codice_ateco",
    "settore",
    "descrizione",
)
_STRING_FIELDS = ("nome", "regione", "codice_ateco", "settore", "descrizione")

# (min, max) length after trimming
_LENGTHS = {
    "nome": (2, 100),
    "regione": (2, 50),
    "codice_ateco": (5, 10),
    "settore": (2, 100),
    "descrizione": (10, 1000),
}

# largest value a NUMERIC(15, 2) column holds
MAX_AMOUNT = 9_999_999_999_999.99

Result = tuple[bool, str]
_OK: Result = (True, "")


# ---------------------------------------------------------------------------
# Single-purpose predicates
# ---------------------------------------------------------------------------


def validate_body_exists(body: Any) -> Result:
    if not body:
        return False, "request body missing or empty"
    if not isinstance(body, dict):
        return False, "request body must be a JSON object"
    return _OK


def validate_required(value: Any, field: str) -> Result:
    if value is None or value == "":
        return False, f"{field} is required"
    return _OK


def validate_number(value: Any, field: str) -> Result:
    # bool is an int subclass; JSON true/false is not a number here
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False, f"{field} must be a valid number"
    if isinstance(value, float) and not math.isfinite(value):
        return False, f"{field} must be a valid number"
    return _OK


def validate_non_negative(value: float, field: str) -> Result:
    if value < 0:
        return False, f"{field} must be zero or positive"
    return _OK


def validate_max_amount(value: float, field: str) -> Result:
    if value > MAX_AMOUNT:
        return False, f"{field} cannot exceed {MAX_AMOUNT:.2f}"
    return _OK


def validate_string(value: Any, field: str, min_length: int = 1, max_length: int = 255) -> Result:
    if not isinstance(value, str):
        return False, f"{field} must be a string"
    length = len(value.strip())
    if length < min_length:
        return False, f"{field} must be at least {min_length} characters"
    if length > max_length:
        return False, f"{field} cannot exceed {max_length} characters"
    return _OK


def validate_ateco(value: str) -> Result:
    if not ATECO_RE.fullmatch(value):
        return False, "codice_ateco has an invalid format (e.g. 62.01.00)"
    return _OK


def validate_id(raw: Any) -> tuple[bool, str, int | None]:
    """Validate a path id: a positive integer. Returns the parsed id."""
    text = str(raw).strip()
    if not _ID_RE.fullmatch(text) or int(text) <= 0:
        return False, "invalid ID", None
    return True, "", int(text)


# ---------------------------------------------------------------------------
# Per-field rules shared by create and update
# ---------------------------------------------------------------------------


def _check_amount(data: dict, field: str) -> Result:
    ok, msg = validate_number(data[field], field)
    if not ok:
        return ok, msg
    ok, msg = validate_non_negative(data[field], field)
    if not ok:
        return ok, msg
    return validate_max_amount(data[field], field)


def _check_text(data: dict, field: str) -> Result:
    lo, hi = _LENGTHS[field]
    return validate_string(data[field], field, lo, hi)


def _check_ateco(data: dict) -> Result:
    ok, msg = _check_text(data, "codice_ateco")
    if not ok:
        return ok, msg
    return validate_ateco(data["codice_ateco"].strip())


def _has_description(data: dict) -> bool:
    return data.get("descrizione") not in (None, "")


def _check_ebitda_margin(data: dict) -> Result:
    if data["ebitda"] > data["fatturato"]:
        return False, "ebitda cannot be greater than fatturato"
    return _OK


def _first_error(*checks) -> Result:
    for check in checks:
        ok, msg = check()
        if not ok:
            return ok, msg
    return _OK


# ---------------------------------------------------------------------------
# Aggregate checks
# ---------------------------------------------------------------------------


def validate_societa_create(data: dict) -> Result:
    """Every field required (descrizione optional); ebitda <= fatturato."""
    return _first_error(
        lambda: validate_required(data.get("nome"), "nome"),
        lambda: _check_text(data, "nome"),
        lambda: validate_required(data.get("fatturato"), "fatturato"),
        lambda: _check_amount(data, "fatturato"),
        lambda: validate_required(data.get("ebitda"), "ebitda"),
        lambda: _check_amount(data, "ebitda"),
        lambda: _check_ebitda_margin(data),
        lambda: validate_required(data.get("regione"), "regione"),
        lambda: _check_text(data, "regione"),
        lambda: validate_required(data.get("codice_ateco"), "codice_ateco"),
        lambda: _check_ateco(data),
        lambda: validate_required(data.get("settore"), "settore"),
        lambda: _check_text(data, "settore"),
        lambda: _check_text(data, "descrizione") if _has_description(data) else _OK,
    )


def validate_societa_update(data: dict | None) -> Result:
    """Partial update: at least one known field, each present field valid.

    ebitda <= fatturato is only checked when both arrive in the same payload;
    the persisted values are not consulted.
    """
    data = data if isinstance(data, dict) else {}
    if not any(field in data for field in SOCIETA_FIELDS):
        return False, "at least one field to update"

    rules = {
        "nome": lambda: _check_text(data, "nome"),
        "fatturato": lambda: _check_amount(data, "fatturato"),
        "ebitda": lambda: _check_amount(data, "ebitda"),
        "regione": lambda: _check_text(data, "regione"),
        "codice_ateco": lambda: _check_ateco(data),
        "settore": lambda: _check_text(data, "settore"),
    }
    checks = [rule for field, rule in rules.items() if field in data]
    if _has_description(data):
        checks.append(lambda: _check_text(data, "descrizione"))
    if "fatturato" in data and "ebitda" in data:
        checks.append(lambda: _check_ebitda_margin(data))
    return _first_error(*checks)


def validate_login(data: Any) -> Result:
    if not isinstance(data, dict) or not data.get("username") or not data.get("password"):
        return False, "username and password are required"
    if not isinstance(data["username"], str) or not isinstance(data["password"], str):
        return False, "username and password must be strings"
    return _OK


def normalize_societa_fields(data: dict) -> dict[str, Any]:
    """Keep known fields only, trim strings, store empty descrizione as NULL."""
    values: dict[str, Any] = {}
    for field in SOCIETA_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field in _STRING_FIELDS and isinstance(value, str):
            value = value.strip()
        if field == "descrizione" and not value:
            value = None
        values[field] = value
    return values
