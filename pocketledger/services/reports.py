"""Monthly aggregates."""

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from ..dates import month_range
from ..models import Category, CategoryKind, Transaction
from ..money import total
from .balances import OpeningBalanceService
from .transactions import TransactionService


class ReportService:
    def __init__(self, session):
        self.session = session
        self.transactions = TransactionService(session)
        self.balances = OpeningBalanceService(session)

    def monthly_category_totals(self, year: int, month: int):
        """Sum the month's transactions per parent category, largest total first.

        A transaction on a subcategory counts toward its parent; one on a
        top-level category counts toward that category.
        """
        start, end = month_range(year, month)
        stmt = (
            select(Transaction)
            .options(joinedload(Transaction.category).joinedload(Category.parent))
            .where(Transaction.date >= start, Transaction.date < end)
        )

        totals = {}
        for tx in self.session.scalars(stmt).unique():
            group = tx.category.parent or tx.category
            row = totals.setdefault(group.id, {"id": group.id, "name": group.name, "amounts": []})
            row["amounts"].append(tx.amount)

        rows = [{"id": r["id"], "name": r["name"], "total": total(r["amounts"])} for r in totals.values()]
        # ties by name, then largest first; sort is stable
        rows.sort(key=lambda r: r["name"])
        rows.sort(key=lambda r: r["total"], reverse=True)
        return rows

    def monthly_summary(self, year: int, month: int) -> dict:
        opening = self.balances.get(year, month)
        income = total(self.transactions.amounts_in_month(year, month, CategoryKind.INCOME))
        expense = total(self.transactions.amounts_in_month(year, month, CategoryKind.EXPENSE))
        return {
            "year": year,
            "month": month,
            "opening_balance": opening["amount"],
            "opening_source": opening["source"],
            "income": income,
            "expense": expense,
            "closing_balance": total([opening["amount"], income, expense.copy_negate()]),
        }
