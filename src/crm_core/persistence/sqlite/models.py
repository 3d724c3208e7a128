"""SQLAlchemy ORM models for CRM SQLite persistence."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):  # type: ignore[misc]
    pass


class UserRecord(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    is_email_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class CompanyRecord(Base):
    __tablename__ = "companies"

    domain_name: Mapped[str] = mapped_column(String, primary_key=True)
    number_of_employees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
