"""
Account Model

Registered API users. Only the auth routes touch this table; the catalog
core never reads it.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Account(Base):
    """
    Account model representing a registered user.

    Table: accounts

    Indexes:
    - username: Unique, used for login
    - email: Unique
    """

    __tablename__ = "accounts"

    account_id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Login name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )

    firstname: Mapped[str] = mapped_column(String(255), nullable=False)
    lastname: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    role: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
        comment="Access role, 1 for regular accounts"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Account(account_id={self.account_id}, username='{self.username}')"
