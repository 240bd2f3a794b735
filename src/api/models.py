"""Pydantic models for API request/response."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.model.user import Address


class AddressModel(BaseModel):
    """Postal address."""
    model_config = ConfigDict(from_attributes=True)

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
        )


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Required fields are optional here so that missing values reach the
    auth service and fail with its 400 message.
    """
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[AddressModel] = None


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class CreditHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    timestamp: datetime
    score: int
    note: Optional[str] = None


class UserResponse(BaseModel):
    """User profile without the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[AddressModel] = None
    credit_score: int = Field(..., ge=300, le=850)
    credit_history: list[CreditHistoryResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    user: UserResponse


class ScoreUpdateResponse(BaseModel):
    message: str
    user: UserResponse


class OfferResponse(BaseModel):
    """Credit card offer."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    card_name: str
    issuer: str
    min_credit_score: int
    max_credit_score: Optional[int] = None
    annual_fee: float = 0
    apr: Optional[float] = None
    rewards: Optional[str] = None
    card_type: Optional[str] = None
    details: Optional[str] = None
    image_url: Optional[str] = None
    apply_url: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body of every error response."""
    status: Literal["fail", "error"]
    message: str
    stack: Optional[str] = Field(None, description="Only present in development")
