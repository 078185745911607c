"""
Authentication Router

Handles account endpoints:
- Registration (username/email/password → access token)
- Login (username/password → access token and account info)
- Password change (Bearer token + old/new password)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens are JWTs valid for 14 days by default
- Every failed login answers the same "Invalid Credentials" message,
  whether the username is unknown or the password is wrong
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy import or_, select

from catalog.config import get_settings
from catalog.dependencies import CurrentAccount, DbSession, Verifier
from catalog.models import Account
from catalog.schemas import (
    AccountInfo,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
)
from catalog.services.rate_limiter import limiter
from catalog.services.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": MessageResponse, "description": "Bad request"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="""
    Create a new account and receive an access token for it.

    **Password Requirements:**
    - Minimum 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number

    **Username Requirements:**
    - 3-50 characters
    - Must start with a letter
    - Only letters, numbers, and underscores
    """,
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    account_data: RegisterRequest,
    db: DbSession,
) -> RegisterResponse:
    """
    Register a new account.

    1. Validates field formats (handled by Pydantic)
    2. Checks for a duplicate username or email
    3. Hashes the password with bcrypt
    4. Creates the account and signs a token for it
    """
    stmt = select(Account).where(
        or_(Account.username == account_data.username, Account.email == account_data.email)
    )
    existing = db.execute(stmt).scalars().first()

    if existing is not None:
        detail = "Username exists" if existing.username == account_data.username else "Email exists"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    account = Account(
        username=account_data.username,
        email=account_data.email,
        firstname=account_data.firstname,
        lastname=account_data.lastname,
        phone=account_data.phone,
        hashed_password=hash_password(account_data.password),
    )

    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info(f"New account registered: {account.username}")

    return RegisterResponse(
        access_token=create_access_token({"sub": str(account.account_id)}),
        id=account.account_id,
    )


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login with username and password",
    description="""
    Authenticate and receive an access token.

    **Usage:**
    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <accessToken>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    verifier: Verifier,
) -> LoginResponse:
    account = verifier.verify(credentials.username, credentials.password)

    if account is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Credentials",
        )

    logger.info(f"Account logged in: {account.username}")

    return LoginResponse(
        access_token=create_access_token({"sub": str(account.account_id)}),
        user=AccountInfo(
            name=account.firstname,
            email=account.email,
            role=account.role,
            id=account.account_id,
        ),
    )


# -------------------------------------------------------------------------
# Password Change Endpoint
# -------------------------------------------------------------------------
@router.patch(
    "/change-password",
    response_model=MessageResponse,
    summary="Change password",
    description="Replace the password of the signed-in account. The old password must match.",
)
@limiter.limit(settings.rate_limit_auth)
def change_password(
    request: Request,
    passwords: ChangePasswordRequest,
    account: CurrentAccount,
    db: DbSession,
) -> MessageResponse:
    if not verify_password(passwords.old_password, account.hashed_password):
        logger.warning(f"Password change rejected for {account.username}: old password mismatch")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid Credentials",
        )

    account.hashed_password = hash_password(passwords.new_password)
    db.commit()

    logger.info(f"Password changed for {account.username}")

    return MessageResponse(message="Password updated")
