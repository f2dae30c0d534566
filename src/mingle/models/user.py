# src/mingle/models/user.py
"""SQLAlchemy models for accounts and their profile details."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mingle.db.session import Base
from mingle.db.time import utcnow


class User(Base):
    """Account identity with credentials.

    ``followers`` and ``following`` are read-only views over the ``follow``
    table, which is the only place a follow relationship is stored.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    profile: Mapped[ProfileDetails | None] = relationship(
        "ProfileDetails",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    followers: Mapped[list[User]] = relationship(
        "User",
        secondary="follow",
        primaryjoin="User.id == Follow.following_id",
        secondaryjoin="User.id == Follow.follower_id",
        order_by="Follow.id",
        viewonly=True,
    )
    following: Mapped[list[User]] = relationship(
        "User",
        secondary="follow",
        primaryjoin="User.id == Follow.follower_id",
        secondaryjoin="User.id == Follow.following_id",
        order_by="Follow.id",
        viewonly=True,
    )

    @property
    def profile_id(self) -> int | None:
        """Return the id of the attached profile, if any."""
        return self.profile.id if self.profile is not None else None

    @property
    def follower_ids(self) -> list[int]:
        """Return ids of users following this user."""
        return [user.id for user in self.followers]

    @property
    def following_ids(self) -> list[int]:
        """Return ids of users this user follows."""
        return [user.id for user in self.following]


class ProfileDetails(Base):
    """Optional display details owned by exactly one user."""

    __tablename__ = "profile_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Unique: a user has at most one profile.
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    mobile_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    date_of_birth: Mapped[str | None] = mapped_column(String(32), nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="profile")
