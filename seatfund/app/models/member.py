"""
Member database model.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum
from seatfund.app.db.session import Base
from seatfund.app.db.types import utcnow
from seatfund.app.models.enums import MemberStatus


class Member(Base):
    """
    Member of the scheme.

    Members contribute to seats and receive payouts. Their running balance is
    not stored here; it lives on the latest transaction row.
    """
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    status = Column(Enum(MemberStatus), default=MemberStatus.ACTIVE, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Member(id={self.id}, name='{self.name}', status='{self.status.value}')>"
