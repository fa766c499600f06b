# File: app/schemas/user.py

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BeforeValidator, EmailStr
from pydantic_core import PydanticCustomError

from app.core.errors import FIELD_ERROR
from app.models.user import KycStatus
from app.schemas.common import CamelModel, field_message
from app.services.validation import EMAIL_MAX_LENGTH

INVALID_EMAIL = "Please provide a valid email address"


def _prepare_email(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        return None
    if len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(FIELD_ERROR, INVALID_EMAIL)
    return value


# Missing fields stay None here; the services report them with one shared message.
Text = Annotated[str, field_message("Name, email and password must be strings")]
Email = Annotated[
    Optional[Annotated[EmailStr, field_message(INVALID_EMAIL)]],
    BeforeValidator(_prepare_email),
]


class RegisterRequest(CamelModel):
    name: Optional[Text] = None
    email: Email = None
    password: Optional[Text] = None


class LoginRequest(CamelModel):
    email: Optional[Annotated[str, field_message("Email and password must be strings")]] = None
    password: Optional[Annotated[str, field_message("Email and password must be strings")]] = None


class UserRead(CamelModel):
    id: str
    name: str
    email: str
    kyc_status: KycStatus
    is_admin: bool = False
    created_at: datetime


class UserResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    user: UserRead


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead


# -----------------------------
# KYC
# -----------------------------

class KycSubmitRequest(CamelModel):
    documents: Optional[Annotated[List[str], field_message("Documents must be a list of strings")]] = None


class KycRead(CamelModel):
    status: KycStatus
    submitted_at: Optional[datetime] = None
    documents: List[str] = []


class KycStatusResponse(KycRead):
    success: bool = True


class KycSubmitResponse(CamelModel):
    success: bool = True
    message: str
    kyc: KycRead


class KycReviewRequest(CamelModel):
    status: Optional[Annotated[KycStatus, field_message("Invalid KYC status")]] = None
