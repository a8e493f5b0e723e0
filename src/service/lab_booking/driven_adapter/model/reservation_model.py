import datetime as dt
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservation'

    # Surrogate insertion counter, gives a stable "newest first" ordering
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)  # UUID7
    lab: Mapped[str] = mapped_column(String(20), nullable=False)
    seat: Mapped[str] = mapped_column(String(4), nullable=False)
    building: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_slot: Mapped[str] = mapped_column(String(13), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default='upcoming', nullable=False)
    booked_on: Mapped[dt.date] = mapped_column(Date, nullable=False)
    anonymous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    owner_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_walk_in: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        # One upcoming reservation per seat and slot; cancelled/completed rows stay as history
        Index(
            'uq_reservation_active_seat',
            'lab',
            'seat',
            'date',
            'time_slot',
            unique=True,
            sqlite_where=text("status = 'upcoming'"),
            postgresql_where=text("status = 'upcoming'"),
        ),
    )

    def __repr__(self):
        return (
            f'<ReservationModel(id={self.id}, lab={self.lab}, seat={self.seat}, '
            f'date={self.date}, time_slot={self.time_slot}, status={self.status})>'
        )
