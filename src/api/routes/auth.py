"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from api.models import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserResponse
from services.auth_service import AuthResult, AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user.

    Returns:
        JWT token and user info (without password hash)

    Raises:
        400 if a required field is missing or the email is already registered
    """
    result = auth_service.register(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        phone_number=request.phone_number,
        date_of_birth=request.date_of_birth,
        address=request.address.to_domain() if request.address else None,
    )
    return _to_response(result)


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Login user and return JWT token.

    Raises:
        400 if email or password is missing, 401 if credentials are invalid
    """
    result = auth_service.login(email=request.email, password=request.password)
    return _to_response(result)
