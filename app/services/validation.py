# File: app/services/validation.py

"""
Explicit request validation.

Request models already enforce field types and numeric ranges. The
``validate_*`` functions here apply what the models cannot: presence checks
that share one message, normalization and business rules. Each returns a
``ValidationResult`` holding either a typed, normalized value or the first
field-specific error message. Services turn a failed result into a 400.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email

from app.core.errors import BadRequestError
from app.models.asset import AssetType
from app.models.user import KycStatus

T = TypeVar("T")

SYMBOL_RE = re.compile(r"^[A-Z0-9]{2,11}$")
TOKEN_TYPES = ("ERC-20", "ERC-721", "ERC-1155")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 254
TOKEN_NAME_MAX_LENGTH = 100

# Upper bounds for client-supplied numbers; keeps prices and totals finite
# and supplies inside a 64-bit column.
MAX_AMOUNT = 1e15
MAX_TOKEN_SUPPLY = 10**15


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, field: Optional[str] = None) -> "ValidationResult[T]":
        return cls(error=error, field=field)

    def unwrap(self) -> T:
        """Return the value or raise BadRequestError with the error message."""
        if self.error is not None:
            raise BadRequestError(self.error)
        return self.value


@dataclass(frozen=True)
class Registration:
    name: str
    email: str
    password: str


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class Pledge:
    asset_type: AssetType
    description: str
    estimated_value: float
    documents: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MintOptions:
    token_name: Optional[str]
    token_symbol: Optional[str]
    token_supply: Optional[int]
    token_type: str
    fractional: bool
    is_listed: bool


@dataclass(frozen=True)
class Amount:
    key: str
    amount: float
    price: Optional[float] = None


# -----------------------------
# Primitive checks
# -----------------------------

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_list(values: Optional[List[str]]) -> List[str]:
    return [item.strip() for item in values or [] if item.strip()]


def is_valid_email(email: str) -> bool:
    if len(email) > EMAIL_MAX_LENGTH:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def password_problem(password: str) -> Optional[str]:
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
    if not re.search(r"[a-z]", password):
        return "Password must contain at least one lowercase letter"
    if not re.search(r"[A-Z]", password):
        return "Password must contain at least one uppercase letter"
    if not re.search(r"\d", password):
        return "Password must contain at least one number"
    return None


# -----------------------------
# Auth
# -----------------------------

def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> ValidationResult[Registration]:
    if _is_blank(name) or _is_blank(email) or _is_blank(password):
        return ValidationResult.failure("All fields are required")

    name = name.strip()
    if len(name) < NAME_MIN_LENGTH:
        return ValidationResult.failure(
            f"Name must be at least {NAME_MIN_LENGTH} characters long", "name"
        )
    if len(name) > NAME_MAX_LENGTH:
        return ValidationResult.failure(
            f"Name must be at most {NAME_MAX_LENGTH} characters long", "name"
        )

    email = email.strip().lower()
    if not is_valid_email(email):
        return ValidationResult.failure("Please provide a valid email address", "email")

    problem = password_problem(password)
    if problem:
        return ValidationResult.failure(problem, "password")

    return ValidationResult.success(Registration(name=name, email=email, password=password))


def validate_credentials(email: Optional[str], password: Optional[str]) -> ValidationResult[Credentials]:
    if _is_blank(email) or _is_blank(password):
        return ValidationResult.failure("Email and password are required")
    return ValidationResult.success(Credentials(email=email.strip().lower(), password=password))


# -----------------------------
# KYC
# -----------------------------

def validate_kyc_documents(documents: Optional[List[str]]) -> ValidationResult[List[str]]:
    docs = _clean_list(documents)
    if not docs:
        return ValidationResult.failure("At least one identity document is required", "documents")
    return ValidationResult.success(docs)


def validate_kyc_status(value: Any) -> ValidationResult[KycStatus]:
    try:
        return ValidationResult.success(KycStatus(value))
    except ValueError:
        return ValidationResult.failure("Invalid KYC status", "status")


# -----------------------------
# Assets
# -----------------------------

def validate_pledge(
    asset_type: Any,
    description: Optional[str],
    estimated_value: Optional[float],
    documents: Optional[List[str]] = None,
) -> ValidationResult[Pledge]:
    if _is_blank(asset_type) or _is_blank(description) or estimated_value is None:
        return ValidationResult.failure("Asset type, description and estimated value are required")

    try:
        kind = AssetType(asset_type)
    except ValueError:
        return ValidationResult.failure("Invalid asset type", "assetType")

    if estimated_value < 0:
        return ValidationResult.failure(
            "Estimated value must be a non-negative number", "estimatedValue"
        )

    return ValidationResult.success(
        Pledge(
            asset_type=kind,
            description=description.strip(),
            estimated_value=float(estimated_value),
            documents=_clean_list(documents),
        )
    )


def validate_mint(
    token_name: Optional[str] = None,
    token_symbol: Optional[str] = None,
    token_supply: Optional[int] = None,
    token_type: Optional[str] = None,
    fractional: Optional[bool] = None,
    is_listed: Optional[bool] = None,
) -> ValidationResult[MintOptions]:
    name = None if _is_blank(token_name) else token_name.strip()

    symbol = None
    if not _is_blank(token_symbol):
        symbol = token_symbol.strip().upper()
        if not SYMBOL_RE.match(symbol):
            return ValidationResult.failure(
                "Token symbol must be 2-11 letters or digits", "tokenSymbol"
            )

    if token_supply is not None and not 1 <= token_supply <= MAX_TOKEN_SUPPLY:
        return ValidationResult.failure(
            "Token supply must be a whole number of at least 1", "tokenSupply"
        )

    kind = "ERC-20" if _is_blank(token_type) else token_type.strip()
    if kind not in TOKEN_TYPES:
        return ValidationResult.failure(
            f"Token type must be one of {', '.join(TOKEN_TYPES)}", "tokenType"
        )

    return ValidationResult.success(
        MintOptions(
            token_name=name,
            token_symbol=symbol,
            token_supply=token_supply,
            token_type=kind,
            fractional=bool(fractional),
            is_listed=bool(is_listed),
        )
    )


def validate_listing_flag(is_listed: Optional[bool]) -> ValidationResult[bool]:
    if is_listed is None:
        return ValidationResult.failure("isListed must be a boolean", "isListed")
    return ValidationResult.success(is_listed)


def validate_reason(reason: Optional[str]) -> ValidationResult[str]:
    if _is_blank(reason):
        return ValidationResult.failure("A rejection reason is required", "reason")
    return ValidationResult.success(reason.strip())


# -----------------------------
# Marketplace / liquidity
# -----------------------------

def validate_amount(
    key: Optional[str],
    amount: Optional[float],
    *,
    key_label: str = "tokenId",
    price: Optional[float] = None,
    require_price: bool = False,
) -> ValidationResult[Amount]:
    if _is_blank(key):
        return ValidationResult.failure(f"{key_label} is required", key_label)

    if amount is None or amount <= 0:
        return ValidationResult.failure("Amount must be a positive number", "amount")

    if require_price and (price is None or price < 0):
        return ValidationResult.failure("Price must be a non-negative number", "price")

    return ValidationResult.success(
        Amount(key=key.strip(), amount=float(amount), price=None if price is None else float(price))
    )
