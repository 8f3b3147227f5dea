"""
User database model.

Users approve expenses. Authentication lives outside the ledger core,
so only identity and role are stored here.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from seatfund.app.db.session import Base
from seatfund.app.db.types import utcnow
from seatfund.app.models.enums import UserRole


class User(Base):
    """User model. Soft-deletable."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(Enum(UserRole), default=UserRole.OPERATOR, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
