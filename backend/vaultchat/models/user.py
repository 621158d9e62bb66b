"""
VaultChat Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
Who:   Read and written through `UserStore`; referenced by chat messages and images.

Invariants:
    - username is unique across all users (unique index in the table)
    - password holds a bcrypt hash, never the plaintext
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from vaultchat.database import Base


class User(Base):
    """A registered account. Immutable after creation apart from password changes."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Login name, unique across all users",
    )

    # bcrypt output is 60 characters; headroom for future schemes
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt password hash",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
