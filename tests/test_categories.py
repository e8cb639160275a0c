from sqlalchemy.orm import Session

from pocketledger.extensions import db
from pocketledger.models import Category

from tests.helpers import (
    EXPENSES,
    INCOME,
    category_tree,
    create_child,
    create_parent,
    create_transaction,
    insert_bare_parent,
)


class TestListCategories:
    """Tests for GET /categories/<kind>."""

    def test_flat_list_sorted_by_name(self, client):
        food = create_parent(client, "Food")
        create_parent(client, "Bills")
        create_child(client, food["id"], "Apples")

        names = [c["name"] for c in client.get(EXPENSES).get_json()]

        assert names == ["Apples", "Bills", "Food"]

    def test_tree_nests_sorted_children(self, client):
        food = create_parent(client, "Food")
        create_child(client, food["id"], "Vegetables")
        create_child(client, food["id"], "Bakery")
        create_parent(client, "Bills")

        tree = category_tree(client)

        assert [p["name"] for p in tree] == ["Bills", "Food"]
        assert tree[0]["children"] == []
        assert [c["name"] for c in tree[1]["children"]] == ["Bakery", "Vegetables"]

    def test_kinds_are_separate(self, client):
        create_parent(client, "Rent")
        create_parent(client, "Salary", path=INCOME)

        assert [c["name"] for c in client.get(EXPENSES).get_json()] == ["Rent"]
        assert [c["name"] for c in client.get(INCOME).get_json()] == ["Salary"]
        assert client.get(INCOME).get_json()[0]["kind"] == "INCOME"


class TestCreateParent:
    """Tests for creating top-level categories."""

    def test_colors_persisted_as_given(self, client):
        parent = create_parent(client, "Leisure", bg="#123456", children_bg="#abcdef")

        assert parent["parentId"] is None
        assert parent["bgColor"] == "#123456"
        assert parent["childrenBgColor"] == "#abcdef"
        assert parent["kind"] == "EXPENSE"

    def test_missing_children_color_rejected(self, client):
        res = client.post(EXPENSES, json={"name": "Leisure", "bgColor": "#123456"})

        assert res.status_code == 400
        assert "childrenBgColor" in res.get_json()["error"]

    def test_missing_name_rejected(self, client):
        res = client.post(EXPENSES, json={"bgColor": "#123456", "childrenBgColor": "#000000"})

        assert res.status_code == 400
        assert "name" in res.get_json()["error"]

    def test_blank_name_rejected(self, client):
        res = client.post(
            EXPENSES, json={"name": "   ", "bgColor": "#123456", "childrenBgColor": "#000000"}
        )

        assert res.status_code == 400

    def test_non_object_body_rejected(self, client):
        res = client.post(EXPENSES, data="not json", content_type="application/json")

        assert res.status_code == 400
        assert res.get_json() == {"error": "Invalid JSON body"}

    def test_text_color_follows_background(self, client):
        dark = create_parent(client, "Dark", bg="#000000")
        light = create_parent(client, "Light", bg="#ffffff")

        assert dark["textColor"] == "#ffffff"
        assert light["textColor"] == "#111827"


class TestCreateChild:
    """Tests for creating subcategories and color inheritance."""

    def test_child_takes_parent_children_color(self, client):
        parent = create_parent(client, "Food", children_bg="#00ff00")

        child = create_child(client, parent["id"], "Fruit", childrenBgColor="#ff0000", bgColor="#0000ff")

        assert child["parentId"] == parent["id"]
        assert child["bgColor"] == "#00ff00"

    def test_first_child_sets_parent_children_color(self, app, client):
        parent_id = insert_bare_parent(app, "Imported")

        child = create_child(client, parent_id, "First", childrenBgColor="#abcabc")

        assert child["bgColor"] == "#abcabc"
        parent = category_tree(client)[0]
        assert parent["childrenBgColor"] == "#abcabc"

        second = create_child(client, parent_id, "Second", childrenBgColor="#999999")
        assert second["bgColor"] == "#abcabc"

    def test_first_child_accepts_bg_color(self, app, client):
        parent_id = insert_bare_parent(app, "Imported")

        child = create_child(client, parent_id, "First", bgColor="#101010")

        assert child["bgColor"] == "#101010"
        assert category_tree(client)[0]["childrenBgColor"] == "#101010"

    def test_first_child_without_color_rejected(self, app, client):
        parent_id = insert_bare_parent(app, "Imported")

        res = client.post(EXPENSES, json={"name": "First", "parentId": parent_id})

        assert res.status_code == 400
        assert "first subcategory" in res.get_json()["error"]
        assert category_tree(client)[0]["children"] == []

    def test_non_first_child_without_parent_color_rejected(self, app, client):
        parent_id = insert_bare_parent(app, "Imported")
        with app.app_context():
            parent = db.session.get(Category, parent_id)
            parent.children.append(Category(name="Legacy", kind=parent.kind, bg_color="#222222"))
            db.session.commit()

        res = client.post(
            EXPENSES, json={"name": "Another", "parentId": parent_id, "childrenBgColor": "#333333"}
        )

        assert res.status_code == 400
        assert res.get_json()["error"] == "Parent has no childrenBgColor configured"

    def test_missing_parent_is_not_found(self, client):
        res = client.post(EXPENSES, json={"name": "Orphan", "parentId": 999})

        assert res.status_code == 404
        assert res.get_json()["error"] == "Parent category not found"

    def test_parent_of_other_kind_is_not_found(self, client):
        salary = create_parent(client, "Salary", path=INCOME)

        res = client.post(EXPENSES, json={"name": "Bonus", "parentId": salary["id"]})

        assert res.status_code == 404

    def test_child_cannot_be_a_parent(self, client):
        parent = create_parent(client, "Food")
        child = create_child(client, parent["id"], "Fruit")

        res = client.post(EXPENSES, json={"name": "Apples", "parentId": child["id"]})

        assert res.status_code == 404


class TestUpdateCategory:
    """Tests for PATCH /categories/<kind>."""

    def test_rename(self, client):
        parent = create_parent(client, "Food")

        res = client.patch(EXPENSES, json={"id": parent["id"], "name": "Groceries"})

        assert res.status_code == 200
        assert res.get_json()["name"] == "Groceries"
        assert res.get_json()["bgColor"] == parent["bgColor"]

    def test_children_color_propagates(self, client):
        parent = create_parent(client, "Food", children_bg="#000001")
        create_child(client, parent["id"], "Fruit")
        veg = create_child(client, parent["id"], "Veg")
        client.patch(EXPENSES, json={"id": veg["id"], "bgColor": "#custom"})

        res = client.patch(EXPENSES, json={"id": parent["id"], "childrenBgColor": "#000002"})

        assert res.status_code == 200
        assert res.get_json()["childrenBgColor"] == "#000002"
        children = category_tree(client)[0]["children"]
        assert {c["bgColor"] for c in children} == {"#000002"}

        again = client.patch(EXPENSES, json={"id": parent["id"], "childrenBgColor": "#000002"})
        assert again.status_code == 200
        assert category_tree(client)[0]["children"] == children

    def test_child_ignores_children_color(self, client):
        parent = create_parent(client, "Food", children_bg="#000001")
        child = create_child(client, parent["id"], "Fruit")

        res = client.patch(
            EXPENSES, json={"id": child["id"], "bgColor": "#00aa00", "childrenBgColor": "#ffffff"}
        )

        assert res.status_code == 200
        assert res.get_json()["bgColor"] == "#00aa00"
        assert res.get_json()["childrenBgColor"] is None

    def test_wrong_kind_is_not_found(self, client):
        parent = create_parent(client, "Food")

        res = client.patch(INCOME, json={"id": parent["id"], "name": "Pay"})

        assert res.status_code == 404
        assert res.get_json()["error"] == "Category not found"

    def test_missing_id_rejected(self, client):
        res = client.patch(EXPENSES, json={"name": "Nameless"})

        assert res.status_code == 400


class TestDeleteCategory:
    """Tests for DELETE /categories/<kind>."""

    def test_delete_parent_removes_children(self, client):
        parent = create_parent(client, "Food")
        create_child(client, parent["id"], "Fruit")
        create_child(client, parent["id"], "Veg")
        keep = create_parent(client, "Bills")

        res = client.delete(f"{EXPENSES}?id={parent['id']}")

        assert res.status_code == 200
        assert res.get_json() == {"ok": True}
        assert [c["id"] for c in client.get(EXPENSES).get_json()] == [keep["id"]]

    def test_blocked_by_own_transactions(self, client):
        parent = create_parent(client, "Food")
        child = create_child(client, parent["id"], "Fruit")
        create_transaction(client, child["id"], "10")

        res = client.delete(f"{EXPENSES}?id={child['id']}")

        assert res.status_code == 400
        assert res.get_json()["error"] == "Cannot delete: this category has expenses."

    def test_blocked_by_child_transactions(self, client):
        parent = create_parent(client, "Food")
        create_child(client, parent["id"], "Veg")
        fruit = create_child(client, parent["id"], "Fruit")
        create_transaction(client, fruit["id"], "10")

        res = client.delete(f"{EXPENSES}?id={parent['id']}")

        assert res.status_code == 400
        assert res.get_json()["error"] == "Cannot delete: a subcategory has expenses."
        assert len(client.get(EXPENSES).get_json()) == 3

    def test_income_messages(self, client):
        parent = create_parent(client, "Work", path=INCOME)
        child = create_child(client, parent["id"], "Salary", path=INCOME)
        create_transaction(client, child["id"], "1000", kind="INCOME")

        res = client.delete(f"{INCOME}?id={parent['id']}")

        assert res.status_code == 400
        assert res.get_json()["error"] == "Cannot delete: a subcategory has income entries."

    def test_delete_child_only(self, client):
        parent = create_parent(client, "Food")
        child = create_child(client, parent["id"], "Fruit")

        res = client.delete(f"{EXPENSES}?id={child['id']}")

        assert res.status_code == 200
        assert category_tree(client)[0]["children"] == []

    def test_unknown_id_is_not_found(self, client):
        res = client.delete(f"{EXPENSES}?id=12345")

        assert res.status_code == 404

    def test_wrong_kind_is_not_found(self, client):
        parent = create_parent(client, "Food")

        res = client.delete(f"{INCOME}?id={parent['id']}")

        assert res.status_code == 404

    def test_missing_id_rejected(self, client):
        res = client.delete(EXPENSES)

        assert res.status_code == 400


def fail_commits(monkeypatch):
    """Make every later commit flush its writes and then fail."""

    def commit(self):
        self.flush()
        raise RuntimeError("connection lost during commit")

    monkeypatch.setattr(Session, "commit", commit)


class TestMutationsAreAtomic:
    """A failure part way through leaves nothing behind."""

    def test_failed_first_child_leaves_parent_untouched(self, app, client, monkeypatch):
        parent_id = insert_bare_parent(app, "Imported")
        fail_commits(monkeypatch)

        res = client.post(
            EXPENSES, json={"name": "First", "parentId": parent_id, "childrenBgColor": "#abcabc"}
        )
        monkeypatch.undo()

        assert res.status_code == 500
        parent = category_tree(client)[0]
        assert parent["childrenBgColor"] is None
        assert parent["children"] == []

    def test_failed_cascade_delete_keeps_every_row(self, client, monkeypatch):
        parent = create_parent(client, "Food")
        create_child(client, parent["id"], "Fruit")
        create_child(client, parent["id"], "Veg")

        fail_commits(monkeypatch)
        res = client.delete(f"{EXPENSES}?id={parent['id']}")
        monkeypatch.undo()

        assert res.status_code == 500
        tree = category_tree(client)
        assert [p["id"] for p in tree] == [parent["id"]]
        assert [c["name"] for c in tree[0]["children"]] == ["Fruit", "Veg"]
