"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Easy to override (tests swap get_db for an in-memory database)
3. Separation of Concerns: Routes focus on the catalog call
4. Lifecycle Management: FastAPI handles creation/cleanup

Dependencies here:
- DbSession: One database session per request
- CurrentAccount: The account behind the Bearer token
- Verifier: Credential checks for the login route
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.database import get_db
from catalog.models import Account
from catalog.services.credentials import AccountVerifier
from catalog.services.security import verify_token_type

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_book(db: Session = Depends(get_db)):
#
# You can write:
#   def get_book(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# JWT Authentication
# =============================================================================
# HTTPBearer extracts the token from the "Authorization: Bearer <token>"
# header. auto_error=False so a missing header reaches get_current_account,
# which answers 401 in the catalog's {"message": ...} format (HTTPBearer on
# its own would answer 403).
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_account(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Account:
    """
    Extract and validate the current account from the JWT token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Decodes and validates the JWT
    3. Looks up the account in the database

    Raises:
        HTTPException: 401 if the token is missing or invalid, or the
        account no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    payload = verify_token_type(credentials.credentials, "access")
    if payload is None:
        raise credentials_exception

    account_id = payload.get("sub")
    if account_id is None or not str(account_id).isdigit():
        raise credentials_exception

    stmt = select(Account).where(Account.account_id == int(account_id))
    account = db.execute(stmt).scalar_one_or_none()

    if account is None:
        raise credentials_exception

    return account


def get_verifier(db: DbSession) -> AccountVerifier:
    return AccountVerifier(db)


# Type aliases for cleaner route signatures
CurrentAccount = Annotated[Account, Depends(get_current_account)]
Verifier = Annotated[AccountVerifier, Depends(get_verifier)]
