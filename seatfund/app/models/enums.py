"""
Enumerations for members, seats and users.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Full administrative access
        OPERATOR: Records transactions, contributions and expenses
        VIEWER: Read-only access
    """
    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"
    VIEWER = "VIEWER"


class MemberStatus(str, enum.Enum):
    """Member status enumeration."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class SeatStatus(str, enum.Enum):
    """
    Seat lifecycle.

    OPEN -> ACTIVE -> COMPLETED is driven by contributions.
    CANCELLED is only reachable through an administrative edit.
    """
    OPEN = "OPEN"  # Nothing paid yet
    ACTIVE = "ACTIVE"  # Partially funded
    COMPLETED = "COMPLETED"  # paid_amount >= total_amount, terminal
    CANCELLED = "CANCELLED"
