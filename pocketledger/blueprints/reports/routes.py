from flask import Blueprint, request, jsonify
from ...extensions import db
from ...money import format_amount
from ...schemas import MonthQuery, parse_args
from ...services import ReportService

reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.route("/monthly-categories")
def monthly_categories():
    query = parse_args(MonthQuery, request.args)
    rows = ReportService(db.session).monthly_category_totals(query.year, query.month)
    return jsonify([
        {"id": r["id"], "name": r["name"], "total": format_amount(r["total"])} for r in rows
    ])


@reports_bp.route("/monthly-summary")
def monthly_summary():
    query = parse_args(MonthQuery, request.args)
    s = ReportService(db.session).monthly_summary(query.year, query.month)
    return jsonify({
        "year": s["year"],
        "month": s["month"],
        "openingBalance": format_amount(s["opening_balance"]),
        "openingSource": s["opening_source"],
        "income": format_amount(s["income"]),
        "expense": format_amount(s["expense"]),
        "closingBalance": format_amount(s["closing_balance"]),
    })
