"""
Credential Verification

Checks a username/password pair against the accounts table. The login
route is its only consumer; the catalog itself never looks at accounts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.models import Account
from catalog.services.security import verify_password

logger = logging.getLogger(__name__)


class AccountVerifier:
    """
    Verifies login credentials.

    Usage:
        account = AccountVerifier(db).verify("reader42", "SecurePass123")
        if account is None:
            ...  # unknown user or wrong password
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def verify(self, username: str, password: str) -> Account | None:
        """
        Return the account if the password matches, otherwise None.

        An unknown username and a wrong password are indistinguishable to the
        caller.
        """
        stmt = select(Account).where(Account.username == username)
        account = self.db.execute(stmt).scalar_one_or_none()

        if account is None or not verify_password(password, account.hashed_password):
            logger.warning(f"Failed login attempt for username: {username}")
            return None

        return account
