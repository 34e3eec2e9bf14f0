"""Acting company / user extraction and validation.

Authentication happens upstream in the hosted auth service, which forwards
the resolved identity as X-Company-Id and X-User-Id headers.
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.lamyda.api.dependencies.db import DBSession
from src.lamyda.core.logging import bind_actor_context
from src.lamyda.repositories import CompanyRepository


@dataclass(frozen=True)
class ActingContext:
    """Who is acting, and on behalf of which company."""

    company_id: UUID
    user_id: UUID


def _parse_uuid_header(value: str | None, header: str) -> UUID:
    if not value:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{header} header is required",
        )
    try:
        return UUID(value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{header} header is not a valid UUID",
        ) from e


async def get_company_id_from_header(
    x_company_id: Annotated[str | None, Header()] = None,
) -> UUID:
    return _parse_uuid_header(x_company_id, "X-Company-Id")


async def get_user_id_from_header(
    x_user_id: Annotated[str | None, Header()] = None,
) -> UUID:
    return _parse_uuid_header(x_user_id, "X-User-Id")


async def get_acting_context(
    company_id: Annotated[UUID, Depends(get_company_id_from_header)],
    user_id: Annotated[UUID, Depends(get_user_id_from_header)],
    session: DBSession,
) -> ActingContext:
    """Validate the company exists and is active, then bind it to the log context."""
    company = await CompanyRepository(session).get_by_id(company_id)

    if company is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Company not found",
        )

    if not company.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Company is inactive",
        )

    bind_actor_context(user_id, company_id)
    return ActingContext(company_id=company_id, user_id=user_id)


Acting = Annotated[ActingContext, Depends(get_acting_context)]
