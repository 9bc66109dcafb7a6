"""
User endpoints.

Provide registration, login, lookup, update and deletion of users.
Login compares the submitted password with the stored one and returns
the user's identity; no token or session is issued and no endpoint
checks the caller's role.
"""

from typing import Dict, List

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from water_reports_api.app.core.exceptions import NotFoundError, ServiceError
from water_reports_api.app.schemas.user import LoginResponse, UserCreate, UserLogin, UserRead
from water_reports_api.app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users() -> List[UserRead]:
    """Return all registered users."""
    return await UserService.list_users()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: int) -> UserRead:
    user = await UserService.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User not found with id: {user_id}")
    return user


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": LoginResponse}},
)
async def register_user(user: UserCreate):
    """Register a new citizen or official.

    A failed registration (missing field, malformed or duplicate email)
    is answered with HTTP 400 and the same body shape as a failed
    login, so the web client can show ``message`` either way.
    """
    try:
        return await UserService.register_user(user)
    except ServiceError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=LoginResponse(message=e.message).model_dump(),
        )


@router.post("/login", response_model=LoginResponse, responses={401: {"model": LoginResponse}})
async def login_user(credentials: UserLogin):
    """Check an email/password pair and return the user's identity."""
    user = await UserService.authenticate(credentials.email, credentials.password)
    if not user:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginResponse(message="Invalid email or password").model_dump(),
        )
    return LoginResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        department=user.department,
        message="Login successful",
    )


@router.put("/{user_id}", response_model=UserRead)
async def update_user(user_id: int, user: UserCreate) -> UserRead:
    """Overwrite a user's profile; ``createdAt`` is kept."""
    return await UserService.update_user(user_id, user)


@router.delete("/{user_id}")
async def delete_user(user_id: int) -> Dict[str, str]:
    await UserService.delete_user(user_id)
    return {"message": "User deleted successfully"}
