"""User administration API routes."""

import secrets

from fastapi import APIRouter, Depends

from ...core.database import Database, get_db
from ...core.exceptions import CodeConflict, UniqueViolation
from ...models.user import User, UserCreate
from ...schemas.link import ErrorResponse, UserResponse
from ..deps import require_admin

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ErrorResponse, "description": "Admin token required"}},
    summary="Create a user",
    description="Register a user with a tier and return its generated API key.",
)
async def create_user(
    user_data: UserCreate,
    db: Database = Depends(get_db),
) -> UserResponse:
    try:
        row = db.create_user(user_data.name, secrets.token_urlsafe(24), user_data.tier.value)
    except UniqueViolation as e:
        raise CodeConflict("Generated API key collided, try again") from e
    return UserResponse.from_user(User(**row))
