"""Transaction operations."""

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from ..dates import month_range
from ..errors import InvalidInput, NotFound
from ..logger import get_logger
from ..models import Category, CategoryKind, Transaction
from .base import atomic

log = get_logger("services.transactions")


class TransactionService:
    def __init__(self, session):
        self.session = session

    def list_month(self, year: int, month: int, kind: CategoryKind = CategoryKind.EXPENSE):
        """Transactions of ``kind`` dated inside the month, newest first.

        Each row comes with its category and the category's parent loaded.
        """
        start, end = month_range(year, month)
        stmt = (
            select(Transaction)
            .options(joinedload(Transaction.category).joinedload(Category.parent))
            .where(Transaction.date >= start, Transaction.date < end, Transaction.kind == kind)
            .order_by(Transaction.date.desc(), Transaction.id.desc())
        )
        return list(self.session.scalars(stmt).unique())

    def _category_for(self, category_id: int, kind: CategoryKind) -> Category:
        category = self.session.scalars(
            select(Category).where(Category.id == category_id, Category.kind == kind)
        ).first()
        if category is None:
            raise InvalidInput(f"Category not found for kind {kind.value}")
        return category

    def create(self, data) -> Transaction:
        category = self._category_for(data.category_id, data.kind)
        tx = Transaction(
            date=data.date,
            amount=data.amount,
            category_id=category.id,
            note=data.note,
            kind=data.kind,
        )
        with atomic(self.session):
            self.session.add(tx)
        log.info("Created %s transaction %s on %s", tx.kind.value, tx.id, tx.date)
        return tx

    def update(self, data) -> Transaction:
        category = self._category_for(data.category_id, data.kind)
        tx = self.session.get(Transaction, data.id)
        if tx is None:
            raise NotFound("Transaction not found")

        with atomic(self.session):
            tx.date = data.date
            tx.amount = data.amount
            tx.category_id = category.id
            tx.note = data.note
            tx.kind = data.kind
        log.info("Updated transaction %s", tx.id)
        return tx

    def delete(self, transaction_id: int) -> None:
        tx = self.session.get(Transaction, transaction_id)
        if tx is None:
            raise NotFound("Transaction not found")
        with atomic(self.session):
            self.session.delete(tx)
        log.info("Deleted transaction %s", transaction_id)

    def amounts_in_month(self, year: int, month: int, kind: CategoryKind = None):
        """Raw Decimal amounts for the month, optionally of one kind."""
        start, end = month_range(year, month)
        stmt = select(Transaction.amount).where(Transaction.date >= start, Transaction.date < end)
        if kind is not None:
            stmt = stmt.where(Transaction.kind == kind)
        return list(self.session.scalars(stmt))
