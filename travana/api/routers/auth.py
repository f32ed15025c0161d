from typing import Optional

from fastapi import APIRouter, Depends

from travana.api.models.schemas import (
    AuthResponse,
    PreferencesUpdate,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    SuccessResponse,
    UpdatePasswordRequest,
    UserProfile,
)
from travana.core.errors import AuthError, UnauthorizedError, ValidationError
from travana.dependencies import get_auth_service, get_bearer_token, get_current_user, require_user
from travana.domain.models import UserEntity
from travana.domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse)
async def sign_up(body: SignUpRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        user, token = await auth.sign_up(body.email, body.password, body.name)
    except AuthError as exc:
        raise ValidationError(str(exc))
    return AuthResponse(user=user.to_profile(), token=token)


@router.post("/signin", response_model=AuthResponse)
async def sign_in(body: SignInRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        user, token = await auth.sign_in(body.email, body.password)
    except AuthError as exc:
        raise UnauthorizedError(str(exc))
    return AuthResponse(user=user.to_profile(), token=token)


@router.post("/demo", response_model=AuthResponse)
async def sign_in_demo(auth: AuthService = Depends(get_auth_service)):
    user, token = await auth.sign_in_demo()
    return AuthResponse(user=user.to_profile(), token=token)


@router.post("/signout", response_model=SuccessResponse)
async def sign_out(token: Optional[str] = Depends(get_bearer_token), auth: AuthService = Depends(get_auth_service)):
    await auth.sign_out(token)
    return SuccessResponse()


@router.get("/me", response_model=UserProfile)
async def me(user: UserEntity = Depends(require_user)):
    return user.to_profile()


@router.patch("/preferences", response_model=UserProfile)
async def update_preferences(
    body: PreferencesUpdate,
    user: UserEntity = Depends(require_user),
    auth: AuthService = Depends(get_auth_service),
):
    updated = await auth.update_preferences(user, body)
    if not updated:
        raise UnauthorizedError()
    return updated.to_profile()


@router.post("/reset-password", response_model=SuccessResponse)
async def reset_password(body: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        await auth.reset_password(body.email)
    except AuthError as exc:
        raise ValidationError(str(exc))
    return SuccessResponse()


@router.post("/update-password", response_model=SuccessResponse)
async def update_password(
    body: UpdatePasswordRequest,
    user: Optional[UserEntity] = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    if len(body.newPassword) < 6:
        raise ValidationError("Password must be at least 6 characters long")
    try:
        await auth.update_password(user, body.newPassword)
    except AuthError as exc:
        raise UnauthorizedError(str(exc))
    return SuccessResponse()
