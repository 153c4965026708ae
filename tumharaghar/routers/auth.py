"""
Authentication API endpoints for sign-in, sign-up, sign-out and the current session.
Tokens are returned in the body and also set as the session cookie.
"""

from fastapi import APIRouter, Depends, Response, status
from tumharaghar.schemas.auth import Session, SessionResponse, SignInRequest, SignUpRequest
from tumharaghar.schemas.error import get_error_responses
from tumharaghar.services.auth import SessionProvider
from tumharaghar.utils.cookies import clear_session_cookie, set_session_cookie
from tumharaghar.utils.dependencies import get_session, get_session_provider


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/sign-in",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    description="Authenticate with email and password and start a session",
    responses=get_error_responses(401, 422, 502)
)
async def sign_in(
    credentials: SignInRequest,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider)
) -> SessionResponse:
    """
    Sign in and return the session with its access token.

    Raises:
        ValidationError: If the credentials are malformed
        InvalidCredentialsError: If the credentials do not match an account
    """
    session = await provider.sign_in(credentials.email, credentials.password)
    set_session_cookie(response, session.access_token, session.expires_in)
    return session


@router.post(
    "/sign-up",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register as a buyer or seller and start a session",
    responses=get_error_responses(409, 422, 502)
)
async def sign_up(
    data: SignUpRequest,
    response: Response,
    provider: SessionProvider = Depends(get_session_provider)
) -> SessionResponse:
    """
    Create an account and sign it in.

    Raises:
        ValidationError: If a field breaks its rule
        DuplicateResourceError: If the email is already registered
    """
    session = await provider.sign_up(
        email=data.email,
        password=data.password,
        full_name=data.full_name,
        role=data.role,
        phone=data.phone
    )
    set_session_cookie(response, session.access_token, session.expires_in)
    return session


@router.post(
    "/sign-out",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    description="Drop the session cookie"
)
async def sign_out(
    response: Response,
    session: Session = Depends(get_session),
    provider: SessionProvider = Depends(get_session_provider)
) -> None:
    await provider.sign_out(session)
    clear_session_cookie(response)


@router.get(
    "/session",
    response_model=Session,
    summary="Current session",
    description="Session of the bearer token or cookie; anonymous when absent or invalid"
)
async def current_session(session: Session = Depends(get_session)) -> Session:
    return session
