"""
Account Pydantic Schemas

Schemas:
- RegisterRequest: Registration data (username, email, password, names)
- LoginRequest / LoginResponse: Credentials in, access token out
- ChangePasswordRequest: Old and new password for a signed-in account

Token fields use camelCase on the wire (``accessToken``), matching the
clients this API was written for.
"""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _check_password_strength(v: str) -> str:
    """
    Validate password strength.

    Requirements:
    - At least 8 characters (enforced by min_length)
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number
    """
    if not re.search(r"[A-Z]", v):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", v):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", v):
        raise ValueError("Password must contain at least one number")
    return v


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique login name",
        examples=["reader42"],
    )
    email: EmailStr = Field(..., examples=["reader@example.com"])
    password: str = Field(..., min_length=8, max_length=128)
    firstname: str = Field(..., min_length=1, max_length=255)
    lastname: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=32)

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        """Usernames start with a letter and use letters, digits and underscores."""
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9_]*$", v):
            raise ValueError(
                "Username must start with a letter and contain only "
                "letters, numbers, and underscores"
            )
        return v

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, v: str) -> str:
        return _check_password_strength(v)


class RegisterResponse(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    id: int

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AccountInfo(BaseModel):
    """Public part of an account, returned on login."""

    name: str
    email: str
    role: int
    id: int


class LoginResponse(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    user: AccountInfo

    model_config = ConfigDict(populate_by_name=True)


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., alias="oldPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=8, max_length=128)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("new_password")
    @classmethod
    def new_password_must_be_strong(cls, v: str) -> str:
        return _check_password_strength(v)
