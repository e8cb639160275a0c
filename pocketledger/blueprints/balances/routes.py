from flask import Blueprint, request, jsonify
from ...extensions import db
from ...money import format_amount
from ...schemas import MonthQuery, OpeningBalanceIn, parse, parse_args
from ...services import OpeningBalanceService

balances_bp = Blueprint("balances", __name__, url_prefix="/monthly-opening-balance")


def _to_json(result):
    body = {
        "year": result["year"],
        "month": result["month"],
        "amount": format_amount(result["amount"]),
        "source": result["source"],
    }
    if "suggested_from" in result:
        body["suggestedFrom"] = result["suggested_from"]
    return body


@balances_bp.route("", methods=["GET"])
def get_opening_balance():
    query = parse_args(MonthQuery, request.args)
    result = OpeningBalanceService(db.session).get(query.year, query.month)
    return jsonify(_to_json(result))


@balances_bp.route("", methods=["PUT"])
def set_opening_balance():
    data = parse(OpeningBalanceIn, request.get_json(silent=True))
    result = OpeningBalanceService(db.session).set(data.year, data.month, data.amount)
    return jsonify(_to_json(result))
