"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from slotpoll.api.deps import get_current_voter, get_store
from slotpoll.core import config
from slotpoll.core.rate_limit import limiter, RATE_LIMITS
from slotpoll.core.security import ACCESS_TOKEN_COOKIE, create_user_token
from slotpoll.engine.session import VoterContext
from slotpoll.schemas import LoginRequest, RegisterRequest, SuccessResponse, UserResponse
from slotpoll.services import authenticate_user, register_user
from slotpoll.store import RecordStore

router = APIRouter()


def _set_session_cookie(response: Response, voter: VoterContext) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=create_user_token(voter.user_id, voter.email),
        httponly=True,  # Prevents JavaScript access (XSS protection)
        secure=config.settings.ENVIRONMENT == "production",  # Requires HTTPS in production
        samesite="lax",  # CSRF protection
        max_age=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/register", response_model=UserResponse, status_code=201)
@limiter.limit(RATE_LIMITS["register"])
async def register(
    request: Request,
    body: RegisterRequest,
    response: Response,
    store: RecordStore = Depends(get_store),
) -> UserResponse:
    """
    Create an account and sign it in.

    Example:
        Request:
            POST /api/v1/auth/register
            {
                "email": "sam@example.com",
                "password": "correct horse"
            }

        Response (201):
            {
                "user_id": "7d1c...",
                "email": "sam@example.com"
            }
            Set-Cookie: access_token=eyJhbGc...; HttpOnly; SameSite=Lax

        Response (400):
            {
                "detail": "An account with this email already exists"
            }
    """
    try:
        voter = await register_user(store, body.email, body.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    _set_session_cookie(response, voter)
    return UserResponse(user_id=voter.user_id, email=voter.email)


@router.post("/login", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    store: RecordStore = Depends(get_store),
) -> SuccessResponse:
    """
    Sign in and set the JWT session cookie.

    Raises:
        HTTPException: 401 if the e-mail or password is wrong
    """
    voter = await authenticate_user(store, body.email, body.password)
    _set_session_cookie(response, voter)
    return SuccessResponse(success=True, message="Logged in successfully")


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    """Clear the session cookie. Safe to call when not signed in."""
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE)
    return SuccessResponse(success=True, message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def me(voter: VoterContext = Depends(get_current_voter)) -> UserResponse:
    """Return the signed-in user."""
    return UserResponse(user_id=voter.user_id, email=voter.email or "")
