"""
User and authentication Pydantic schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from logitrack.models.enums import UserRole
from logitrack.schemas.base import PHONE_PATTERN, PartialUpdate
from logitrack.schemas.driver import DriverRead
from logitrack.schemas.shipment import ShipmentRead


class UserCreate(BaseModel):
    """Schema for creating a new user inside a tenant."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    password: Optional[str] = Field(None, min_length=6)
    role: UserRole = UserRole.DISPATCHER
    # Required when role is DRIVER; creates the driver profile
    license_number: Optional[str] = Field(None, min_length=1, max_length=50)

    @model_validator(mode="after")
    def check_role_fields(self):
        if self.role == UserRole.SUPERADMIN:
            raise ValueError("SUPERADMIN users cannot be created inside a tenant")
        if self.role == UserRole.DRIVER and not self.license_number:
            raise ValueError("license_number is required for DRIVER users")
        return self


class UserUpdate(PartialUpdate):
    """Schema for updating a user."""

    NULLABLE = frozenset({"phone"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    role: Optional[UserRole] = None


class UserStatusUpdate(BaseModel):
    is_active: bool


class UserRead(BaseModel):
    """Schema for reading user data (API response)."""

    id: UUID
    tenant_id: Optional[UUID] = None
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreated(UserRead):
    """Returned once after creation when the server generated the password."""

    temporary_password: Optional[str] = None


class PasswordReset(BaseModel):
    user_id: UUID
    temporary_password: str


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead
    tenant_slug: Optional[str] = None


class TokenData(BaseModel):
    """Schema for token payload data."""

    user_id: UUID
    role: UserRole
    tenant_id: Optional[UUID] = None


class ProfileUpdate(PartialUpdate):
    NULLABLE = frozenset({"phone"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class UserSettings(BaseModel):
    """Per-user preferences stored as JSON on the user row."""

    theme: str = "system"
    language: str = "en"
    notifications: bool = True
    page_size: int = Field(10, ge=1, le=100)


class UserSettingsUpdate(PartialUpdate):
    theme: Optional[str] = None
    language: Optional[str] = None
    notifications: Optional[bool] = None
    page_size: Optional[int] = Field(None, ge=1, le=100)

    def merged_into(self, current: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(current)
        data.update(self.model_dump(exclude_unset=True))
        return data


class AccountExport(BaseModel):
    """Everything stored about the caller, minus credentials."""

    user: UserRead
    settings: UserSettings
    driver: Optional[DriverRead] = None
    shipments: List[ShipmentRead] = []
    exported_at: datetime
