"""Authentication router."""

from fastapi import APIRouter

from report_tracker.dependencies import AuthServiceDep, UserRepoDep
from report_tracker.schemas.auth import LoginRequest, LoginResponse
from report_tracker.schemas.common import ApiResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: LoginRequest,
    user_repo: UserRepoDep,
    auth_service: AuthServiceDep,
) -> ApiResponse[LoginResponse]:
    """Exchange email + password for a bearer token."""
    user = await auth_service.authenticate(user_repo, request.email, request.password)
    token, expires_in = auth_service.create_access_token(user)

    return ApiResponse.ok(
        LoginResponse(
            token=token,
            type=auth_service.TOKEN_TYPE,
            expires_in=expires_in,
            user_id=user.id,
            email=user.email,
        ),
        message="Login successful",
    )
