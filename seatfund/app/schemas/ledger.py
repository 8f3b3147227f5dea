"""
Ledger Schemas.

Input records for the three recording workflows and read models for
ledger queries. Business rules (known kinds, positive amounts, live
references) are enforced by the orchestrator, not here.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from seatfund.app.models.ledger_enums import Account, LedgerEntryType


class TransactionCreate(BaseModel):
    """Input for recording a member transaction."""
    member_id: int
    transaction_type: str
    category_id: Optional[int] = None
    amount: Decimal
    description: Optional[str] = None
    transaction_date: date
    reference_number: Optional[str] = Field(None, max_length=100)


class SeatContributionCreate(BaseModel):
    """Input for recording a seat contribution."""
    seat_id: int
    member_id: int
    amount: Decimal
    contribution_date: date
    notes: Optional[str] = None


class ExpenseCreate(BaseModel):
    """Input for recording an expense."""
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal
    category_id: Optional[int] = None
    expense_date: date
    approved_by_id: int
    receipt_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class LedgerEntryResponse(BaseModel):
    """Schema for displaying a ledger entry."""
    id: int
    transaction_id: Optional[int]
    expense_id: Optional[int]
    entry_type: LedgerEntryType
    account: Account
    amount: Decimal
    running_balance: Decimal
    description: Optional[str]
    entry_date: date
    created_at: datetime

    class Config:
        from_attributes = True


class LedgerPage(BaseModel):
    """One page of ledger entries, newest first."""
    data: List[LedgerEntryResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class AccountBalance(BaseModel):
    """Latest running balance of one account."""
    account: Account
    balance: Decimal
