from .category import Category, CategoryKind
from .transaction import Transaction
from .opening_balance import MonthlyOpeningBalance

__all__ = ["Category", "CategoryKind", "Transaction", "MonthlyOpeningBalance"]
