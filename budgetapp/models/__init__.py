from .identity import Identity
from .user import UserProfile
from .budget import Budget
from .tab import Tab
from .expense import Expense
from .support_request import SupportRequest, SUPPORT_STATUSES

__all__ = ["Identity", "UserProfile", "Budget", "Tab", "Expense", "SupportRequest", "SUPPORT_STATUSES"]
