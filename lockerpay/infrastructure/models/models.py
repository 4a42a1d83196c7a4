from __future__ import annotations
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import (
    JSON,
    DateTime,
    Enum,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column
from lockerpay.core.entities.command import CommandType
from lockerpay.core.entities.locker import LockerStatus
from lockerpay.infrastructure.database import Base


class PaymentModel(Base):
    __tablename__ = "payments"

    external_id: Mapped[str] = mapped_column(String, primary_key=True)
    status: Mapped[str | None] = mapped_column(String, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    raw_event: Mapped[Dict[str, Any] | None] = mapped_column(JSON, nullable=True)


class LockerModel(Base):
    __tablename__ = "lockers"

    locker_id: Mapped[str] = mapped_column(String, primary_key=True)
    status: Mapped[LockerStatus] = mapped_column(Enum(LockerStatus), nullable=False, default=LockerStatus.IDLE)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    open_code: Mapped[str | None] = mapped_column(String(6), nullable=True)
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class CommandModel(Base):
    __tablename__ = "commands"

    locker_id: Mapped[str] = mapped_column(String, primary_key=True)
    command: Mapped[CommandType] = mapped_column(Enum(CommandType), nullable=False)
    open_code: Mapped[str] = mapped_column(String(6), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
