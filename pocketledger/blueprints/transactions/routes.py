from flask import Blueprint, request, jsonify
from ...extensions import db
from ...schemas import IdQuery, TransactionIn, TransactionListQuery, TransactionUpdate, parse, parse_args
from ...services import TransactionService

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


@transactions_bp.route("", methods=["GET"])
def list_transactions():
    query = parse_args(TransactionListQuery, request.args)
    rows = TransactionService(db.session).list_month(query.year, query.month, query.kind)
    return jsonify([tx.to_dict(with_category=True) for tx in rows])


@transactions_bp.route("", methods=["POST"])
def create_transaction():
    data = parse(TransactionIn, request.get_json(silent=True))
    tx = TransactionService(db.session).create(data)
    return jsonify(tx.to_dict()), 201


@transactions_bp.route("", methods=["PATCH"])
def update_transaction():
    data = parse(TransactionUpdate, request.get_json(silent=True))
    tx = TransactionService(db.session).update(data)
    return jsonify(tx.to_dict())


@transactions_bp.route("", methods=["DELETE"])
def delete_transaction():
    query = parse_args(IdQuery, request.args)
    TransactionService(db.session).delete(query.id)
    return jsonify({"ok": True})
