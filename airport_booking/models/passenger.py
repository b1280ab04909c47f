"""Passenger model definition."""

from typing import Optional
from uuid import uuid4

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class Passenger(Base):
    """Passenger entity, looked up by its unique email."""

    __tablename__ = "passengers"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid4())
    )

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    __table_args__ = (
        CheckConstraint("length(email) > 0", name="ck_passenger_email_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Passenger(id={self.id}, email='{self.email}')>"
