"""SQLAlchemy ORM models for the migrun ledger.

The ledger is a single table, ``migrations``, holding one row per
(migration name, direction) that has been executed.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models in migrun."""

    pass


class MigrationRecordModel(Base):
    """Execution record for a migration in one direction."""

    __tablename__ = "migrations"
    __table_args__ = (UniqueConstraint("name", "action", name="uq_migrations_name_action"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    action: Mapped[str] = mapped_column(String(8), nullable=False)
    executed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"MigrationRecordModel({self.name!r}, {self.action!r})"
