"""Helper utilities for tests."""

from pocketledger.extensions import db
from pocketledger.models import Category, CategoryKind

EXPENSES = "/categories/expenses"
INCOME = "/categories/income"


def create_parent(client, name, bg="#111111", children_bg="#eeeeee", path=EXPENSES):
    """Create a parent category through the API and return its JSON."""
    res = client.post(path, json={"name": name, "bgColor": bg, "childrenBgColor": children_bg})
    assert res.status_code == 201, res.get_json()
    return res.get_json()


def create_child(client, parent_id, name, path=EXPENSES, **colors):
    body = {"name": name, "parentId": parent_id}
    body.update(colors)
    res = client.post(path, json=body)
    assert res.status_code == 201, res.get_json()
    return res.get_json()


def create_transaction(client, category_id, amount, on="2024-03-10", kind="EXPENSE", note=None):
    res = client.post(
        "/transactions",
        json={"date": on, "amount": amount, "categoryId": category_id, "kind": kind, "note": note},
    )
    assert res.status_code == 201, res.get_json()
    return res.get_json()


def insert_bare_parent(app, name, kind=CategoryKind.EXPENSE):
    """Insert a parent with no colors, the way seeded rows from older data look.

    Returns:
        int: The new category id.
    """
    with app.app_context():
        parent = Category(name=name, kind=kind)
        db.session.add(parent)
        db.session.commit()
        return parent.id


def category_tree(client, path=EXPENSES):
    return client.get(f"{path}?tree=1").get_json()
