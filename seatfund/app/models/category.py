"""
Category database model.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from seatfund.app.db.session import Base
from seatfund.app.db.types import utcnow


class Category(Base):
    """Optional classification for transactions and expenses."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
