"""Monthly opening balances and the carry-forward suggestion."""

from decimal import Decimal

from sqlalchemy import select

from ..dates import previous_month
from ..logger import get_logger
from ..models import CategoryKind, MonthlyOpeningBalance
from ..money import total
from .base import atomic
from .transactions import TransactionService

log = get_logger("services.balances")

SAVED = "saved"
SUGGESTED = "suggested"


class OpeningBalanceService:
    def __init__(self, session):
        self.session = session
        self.transactions = TransactionService(session)

    def find(self, year: int, month: int):
        return self.session.scalars(
            select(MonthlyOpeningBalance).where(
                MonthlyOpeningBalance.year == year, MonthlyOpeningBalance.month == month
            )
        ).first()

    def get(self, year: int, month: int) -> dict:
        """The saved opening balance, or a suggestion derived from last month.

        The suggestion is ``prev opening + prev income - prev expense``, where
        ``prev opening`` is last month's saved record or zero. It only looks one
        month back and is never persisted.
        """
        record = self.find(year, month)
        if record is not None:
            return {"year": year, "month": month, "amount": record.amount, "source": SAVED}

        prev_year, prev_month = previous_month(year, month)
        prev_record = self.find(prev_year, prev_month)
        prev_opening = prev_record.amount if prev_record is not None else Decimal("0")
        prev_income = total(self.transactions.amounts_in_month(prev_year, prev_month, CategoryKind.INCOME))
        prev_expense = total(self.transactions.amounts_in_month(prev_year, prev_month, CategoryKind.EXPENSE))

        return {
            "year": year,
            "month": month,
            "amount": total([prev_opening, prev_income, prev_expense.copy_negate()]),
            "source": SUGGESTED,
            "suggested_from": {"year": prev_year, "month": prev_month},
        }

    def set(self, year: int, month: int, amount: Decimal) -> dict:
        """Insert or replace the opening balance for the month."""
        with atomic(self.session):
            record = self.find(year, month)
            if record is None:
                record = MonthlyOpeningBalance(year=year, month=month, amount=amount)
                self.session.add(record)
            else:
                record.amount = amount
        log.info("Saved opening balance for %04d-%02d", year, month)
        return {"year": year, "month": month, "amount": amount, "source": SAVED}
