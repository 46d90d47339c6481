# This project was developed with assistance from AI tools.
"""Company CRUD routes.

Reads use optional authentication and are shaped by ``core.policy``;
writes require a valid token and the admin role.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from portal_db import get_db
from portal_db.enums import UserRole
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.policy import UnknownRoleError, full_view, render, render_list
from ..middleware.auth import OptionalUser, require_roles
from ..schemas.societa import (
    SocietaDeleteResponse,
    SocietaDetailResponse,
    SocietaListResponse,
    SocietaMutationResponse,
)
from ..services import societa as societa_service
from ..services.societa import DuplicateNameError
from ..services.validation import (
    normalize_societa_fields,
    validate_body_exists,
    validate_id,
    validate_societa_create,
    validate_societa_update,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_admin_only = [Depends(require_roles(UserRole.ADMIN))]


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="company not found")


def _parse_id(raw: str) -> int:
    ok, error, societa_id = validate_id(raw)
    if not ok:
        raise _bad_request(error)
    return societa_id


def _unknown_role(exc: UnknownRoleError) -> HTTPException:
    logger.warning("Policy rejected unrecognized role=%s", exc.role)
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))


@router.get("", response_model=SocietaListResponse)
async def list_societa(
    user: OptionalUser,
    session: AsyncSession = Depends(get_db),
) -> SocietaListResponse:
    """List companies visible to the caller.

    Anonymous callers get every company censored, admins get everything,
    buyers get only their own company.
    """
    companies = await societa_service.list_societa(session)
    try:
        rendered = render_list(companies, user)
    except UnknownRoleError as exc:
        raise _unknown_role(exc) from exc
    return SocietaListResponse(message=rendered.message, data=rendered.data)


@router.get("/{societa_id}", response_model=SocietaDetailResponse)
async def get_societa(
    societa_id: str,
    user: OptionalUser,
    session: AsyncSession = Depends(get_db),
) -> SocietaDetailResponse:
    """Get a single company, full or censored depending on the caller."""
    numeric_id = _parse_id(societa_id)
    company = await societa_service.get_societa(session, numeric_id)
    if company is None:
        raise _not_found()
    try:
        rendered = render(company, user)
    except UnknownRoleError as exc:
        raise _unknown_role(exc) from exc
    return SocietaDetailResponse(message=rendered.message, data=rendered.data)


@router.post(
    "",
    response_model=SocietaMutationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=_admin_only,
)
async def create_societa(
    payload: Any = Body(default=None),
    session: AsyncSession = Depends(get_db),
) -> SocietaMutationResponse:
    """Create a company (admin only)."""
    ok, error = validate_body_exists(payload)
    if not ok:
        raise _bad_request(error)
    ok, error = validate_societa_create(payload)
    if not ok:
        raise _bad_request(error)

    try:
        company = await societa_service.create_societa(session, normalize_societa_fields(payload))
    except DuplicateNameError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return SocietaMutationResponse(message="company created", data=full_view(company))


@router.patch("/{societa_id}", response_model=SocietaMutationResponse, dependencies=_admin_only)
async def update_societa(
    societa_id: str,
    payload: Any = Body(default=None),
    session: AsyncSession = Depends(get_db),
) -> SocietaMutationResponse:
    """Partially update a company (admin only). At least one field is required."""
    if payload is not None and not isinstance(payload, dict):
        raise _bad_request("request body must be a JSON object")
    ok, error = validate_societa_update(payload)
    if not ok:
        raise _bad_request(error)
    numeric_id = _parse_id(societa_id)

    try:
        company = await societa_service.update_societa(
            session, numeric_id, normalize_societa_fields(payload)
        )
    except DuplicateNameError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    if company is None:
        raise _not_found()

    return SocietaMutationResponse(message="company updated", data=full_view(company))


@router.delete("/{societa_id}", response_model=SocietaDeleteResponse, dependencies=_admin_only)
async def delete_societa(
    societa_id: str,
    session: AsyncSession = Depends(get_db),
) -> SocietaDeleteResponse:
    """Delete a company (admin only)."""
    numeric_id = _parse_id(societa_id)
    if not await societa_service.delete_societa(session, numeric_id):
        raise _not_found()
    return SocietaDeleteResponse(message="company deleted", deleted_id=numeric_id)
