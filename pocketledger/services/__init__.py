"""Domain operations over the ORM session.

Handlers build a service around ``db.session`` for each request; every
mutating method commits once at the end or rolls back on failure.
"""

from .categories import CategoryService
from .transactions import TransactionService
from .balances import OpeningBalanceService
from .reports import ReportService

__all__ = ["CategoryService", "TransactionService", "OpeningBalanceService", "ReportService"]
