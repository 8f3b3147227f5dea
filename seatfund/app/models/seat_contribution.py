"""
Seat contribution database model.
"""

from sqlalchemy import Column, Integer, Text, Date, DateTime, ForeignKey
from seatfund.app.db.session import Base
from seatfund.app.db.types import Money, utcnow


class SeatContribution(Base):
    """One payment by a member towards a seat."""
    __tablename__ = "seat_contributions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    seat_id = Column(Integer, ForeignKey('seats.id'), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey('members.id'), nullable=False, index=True)
    amount = Column(Money(), nullable=False)
    contribution_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<SeatContribution(id={self.id}, seat={self.seat_id}, member={self.member_id}, amount={self.amount})>"
