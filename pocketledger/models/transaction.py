from datetime import date, datetime
from ..extensions import db
from ..money import DecimalString, format_amount
from .category import CategoryKind


class Transaction(db.Model):
    __tablename__ = "transactions"
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, default=date.today, nullable=False, index=True)
    amount = db.Column(DecimalString, nullable=False)
    note = db.Column(db.Text)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False, index=True)
    # copied from the category so month listings filter without a join
    kind = db.Column(db.Enum(CategoryKind, name="category_kind"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    category = db.relationship("Category", back_populates="transactions")

    def to_dict(self, with_category=False):
        data = {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": format_amount(self.amount),
            "note": self.note,
            "categoryId": self.category_id,
            "kind": self.kind.value,
        }
        if with_category:
            category = self.category.to_dict()
            parent = self.category.parent
            category["parent"] = parent.to_dict() if parent is not None else None
            data["category"] = category
        return data
