"""
Authentication endpoints.

Signup and login return the token in the body and also set it as an
HTTP‑only cookie, so browser clients and API clients can use either
transport.  Logout only clears the cookie; tokens are not revoked.
"""

from fastapi import APIRouter, Response, status

from minilink_api.app.core.config import settings
from minilink_api.app.schemas.user import AuthResponse, LoginRequest, MessageResponse, SignupRequest
from minilink_api.app.services.auth_service import AuthService


router = APIRouter()


def _set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
        samesite="lax",
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupRequest, response: Response) -> AuthResponse:
    """Register a new user and log them in.

    Returns 400 if name, email or password is missing and 409 if the
    email is already registered.
    """
    token, user = await AuthService.signup(data)
    _set_token_cookie(response, token)
    return AuthResponse(message="User registered successfully", token=token, user=user)


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, response: Response) -> AuthResponse:
    """Authenticate with email and password.

    Returns 404 for an unknown email and 401 for a wrong password.
    """
    token, user = await AuthService.login(data)
    _set_token_cookie(response, token)
    return AuthResponse(message="Login successful", token=token, user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Logout successful")
