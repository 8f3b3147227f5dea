"""
Seat database model.
"""

from sqlalchemy import Column, Integer, Date, DateTime, Enum, ForeignKey
from seatfund.app.db.session import Base
from seatfund.app.db.types import Money, ZERO, utcnow
from seatfund.app.models.enums import SeatStatus


class Seat(Base):
    """
    Seat model.

    A fixed-value slot funded incrementally by member contributions.
    paid_amount only grows, and only through the contribution workflow.
    Follows OPEN -> ACTIVE -> COMPLETED; CANCELLED is administrative.
    """
    __tablename__ = "seats"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    seat_number = Column(Integer, unique=True, nullable=False)
    member_id = Column(Integer, ForeignKey('members.id'), nullable=True, index=True)

    # Financials
    total_amount = Column(Money(), nullable=False)
    paid_amount = Column(Money(), default=ZERO, nullable=False)

    status = Column(Enum(SeatStatus), default=SeatStatus.OPEN, nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Seat(id={self.id}, number={self.seat_number}, status='{self.status.value}', paid={self.paid_amount}/{self.total_amount})>"
