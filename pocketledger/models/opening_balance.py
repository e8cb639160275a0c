from ..extensions import db
from ..money import DecimalString


class MonthlyOpeningBalance(db.Model):
    __tablename__ = "monthly_opening_balances"
    id = db.Column(db.Integer, primary_key=True)
    year = db.Column(db.Integer, nullable=False)
    month = db.Column(db.Integer, nullable=False)  # 1-12
    amount = db.Column(DecimalString, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("year", "month", name="uq_opening_year_month"),
    )
