from flask import Blueprint, request, jsonify
from ...extensions import db
from ...models import CategoryKind
from ...schemas import CategoryCreate, CategoryUpdate, IdQuery, parse, parse_args
from ...services import CategoryService


def create_categories_blueprint(name, url_prefix, kind):
    """One blueprint per kind; both share the same handlers."""
    bp = Blueprint(name, __name__, url_prefix=url_prefix)

    def service():
        return CategoryService(db.session, kind)

    @bp.route("", methods=["GET"])
    def list_categories():
        tree = request.args.get("tree") == "1"
        categories = service().list(tree=tree)
        return jsonify([c.to_dict(with_children=tree) for c in categories])

    @bp.route("", methods=["POST"])
    def create_category():
        data = parse(CategoryCreate, request.get_json(silent=True))
        category = service().create(data)
        return jsonify(category.to_dict()), 201

    @bp.route("", methods=["PATCH"])
    def update_category():
        data = parse(CategoryUpdate, request.get_json(silent=True))
        category = service().update(data)
        return jsonify(category.to_dict())

    @bp.route("", methods=["DELETE"])
    def delete_category():
        query = parse_args(IdQuery, request.args)
        service().delete(query.id)
        return jsonify({"ok": True})

    return bp


expense_categories_bp = create_categories_blueprint(
    "expense_categories", "/categories/expenses", CategoryKind.EXPENSE
)
income_categories_bp = create_categories_blueprint(
    "income_categories", "/categories/income", CategoryKind.INCOME
)
