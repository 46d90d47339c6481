# This project was developed with assistance from AI tools.
"""Authorization and visibility policy.

Pure functions with no FastAPI, HTTP or database dependencies. Given the
caller's identity (or ``None`` for anonymous callers) they decide whether an
operation is allowed and which view of a company record the caller gets.
The HTTP layer translates the exceptions raised here into status codes.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from portal_db.enums import UserRole

from ..schemas.auth import UserContext
from ..schemas.societa import CensoredSocieta, RenderedSocieta, SocietaResponse

MISSING_DESCRIPTION = "No description available"
CENSORED_REASON = "Login to see full data (nome, fatturato, EBITDA)"

MSG_PUBLIC = "public data, login for full details."
MSG_ADMIN = "admin view."
MSG_BUYER_OWN = "buyer view — your company."
MSG_BUYER_OTHER = "public data censored."
MSG_ADMIN_LIST = "admin view — all data."
MSG_BUYER_LIST = "buyer view — your company only."


class AuthenticationRequiredError(PermissionError):
    """No identity is attached to the request."""

    def __init__(self) -> None:
        super().__init__("authentication required")


class RoleNotAllowedError(PermissionError):
    """The caller is authenticated but their role is not in the allowed set."""

    def __init__(self, allowed: Iterable[UserRole], role: Any) -> None:
        self.allowed = [r.value for r in allowed]
        self.role = getattr(role, "value", role)
        super().__init__("access denied")


class UnknownRoleError(PermissionError):
    """The identity carries a role the policy has no rule for."""

    def __init__(self, role: Any) -> None:
        self.role = getattr(role, "value", role)
        super().__init__("role not recognized")


@dataclass(frozen=True)
class Rendered:
    """A policy decision: the message explaining the view, and the data."""

    message: str
    data: Any


def check_role(identity: UserContext | None, allowed: Iterable[UserRole]) -> UserContext:
    """Return the identity when its role is allowed, else raise."""
    allowed = tuple(allowed)
    if identity is None:
        raise AuthenticationRequiredError()
    if identity.role not in allowed:
        raise RoleNotAllowedError(allowed, identity.role)
    return identity


def censor(company: Any) -> CensoredSocieta:
    """Map a company (ORM row, model or mapping) to its public shape.

    Total over any record that has the public fields; never looks at the
    caller and never touches the store.
    """
    get = company.get if isinstance(company, dict) else lambda k: getattr(company, k, None)
    return CensoredSocieta(
        id=get("id"),
        regione=get("regione"),
        codice_ateco=get("codice_ateco"),
        settore=get("settore"),
        descrizione=get("descrizione") or MISSING_DESCRIPTION,
        censored=True,
        censored_reason=CENSORED_REASON,
    )


def full_view(company: Any) -> SocietaResponse:
    if isinstance(company, SocietaResponse):
        return company
    if isinstance(company, dict):
        return SocietaResponse.model_validate(company)
    return SocietaResponse.model_validate(company, from_attributes=True)


def _company_id(company: Any) -> Any:
    return company.get("id") if isinstance(company, dict) else getattr(company, "id", None)


def owns(identity: UserContext, company: Any) -> bool:
    """True when a buyer's societaId designates this company."""
    return identity.societa_id is not None and _company_id(company) == identity.societa_id


def render(company: Any, identity: UserContext | None) -> Rendered:
    """Decide the view of a single company for the caller."""
    if identity is None:
        return Rendered(MSG_PUBLIC, censor(company))
    if identity.role == UserRole.ADMIN:
        return Rendered(MSG_ADMIN, full_view(company))
    if identity.role == UserRole.BUYER:
        if owns(identity, company):
            return Rendered(MSG_BUYER_OWN, full_view(company))
        return Rendered(MSG_BUYER_OTHER, censor(company))
    raise UnknownRoleError(identity.role)


def render_list(companies: Iterable[Any], identity: UserContext | None) -> Rendered:
    """Decide the visible subset (and view) of a list of companies.

    Buyers get only their own company, in full; other companies are left
    out entirely rather than censored.
    """
    if identity is None:
        return Rendered(MSG_PUBLIC, [censor(c) for c in companies])
    if identity.role == UserRole.ADMIN:
        return Rendered(MSG_ADMIN_LIST, [full_view(c) for c in companies])
    if identity.role == UserRole.BUYER:
        own: list[RenderedSocieta] = [full_view(c) for c in companies if owns(identity, c)]
        return Rendered(MSG_BUYER_LIST, own)
    raise UnknownRoleError(identity.role)
