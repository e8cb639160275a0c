"""Category hierarchy operations for one kind (EXPENSE or INCOME)."""

from sqlalchemy import func, select

from ..errors import DomainRuleError, InvalidInput, NotFound
from ..logger import get_logger
from ..models import Category, CategoryKind, Transaction
from .base import atomic

log = get_logger("services.categories")

DELETE_MESSAGES = {
    CategoryKind.EXPENSE: {
        "has_transactions": "Cannot delete: this category has expenses.",
        "children_have_transactions": "Cannot delete: a subcategory has expenses.",
    },
    CategoryKind.INCOME: {
        "has_transactions": "Cannot delete: this category has income entries.",
        "children_have_transactions": "Cannot delete: a subcategory has income entries.",
    },
}


class CategoryService:
    """Service for one kind's category tree.

    Args:
        session: SQLAlchemy session used for every query and write.
        kind: The CategoryKind this service is scoped to.
    """

    def __init__(self, session, kind: CategoryKind):
        self.session = session
        self.kind = kind
        self.messages = DELETE_MESSAGES[kind]

    def list(self, tree: bool = False):
        """Categories of this kind ordered by name.

        With ``tree`` only parents are returned; their ``children`` relationship
        is already name-ordered.
        """
        stmt = select(Category).where(Category.kind == self.kind)
        if tree:
            stmt = stmt.where(Category.parent_id.is_(None))
        stmt = stmt.order_by(Category.name, Category.id)
        return list(self.session.scalars(stmt))

    def find(self, category_id: int):
        return self.session.scalars(
            select(Category).where(Category.id == category_id, Category.kind == self.kind)
        ).first()

    def get(self, category_id: int) -> Category:
        category = self.find(category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    def create(self, data) -> Category:
        """Create a parent, or a child when ``data.parent_id`` is set."""
        if data.parent_id is None:
            return self.create_parent(data.name, data.bg_color, data.children_bg_color)
        return self.create_child(
            data.name, data.parent_id, data.children_bg_color or data.bg_color
        )

    def create_parent(self, name, bg_color, children_bg_color) -> Category:
        if not bg_color or not children_bg_color:
            raise InvalidInput("bgColor and childrenBgColor are required for parent categories")

        parent = Category(
            name=name,
            kind=self.kind,
            parent_id=None,
            bg_color=bg_color,
            children_bg_color=children_bg_color,
        )
        with atomic(self.session):
            self.session.add(parent)
        log.info("Created %s parent category %s (%s)", self.kind.value, parent.id, name)
        return parent

    def create_child(self, name, parent_id, color=None) -> Category:
        """Create a subcategory, fixing the parent's children color if this is its first child.

        When the parent already has ``children_bg_color`` the supplied color is
        ignored. Otherwise the parent must have no children yet and ``color``
        becomes both the child's color and the parent's children color.
        """
        parent = self.session.scalars(
            select(Category).where(
                Category.id == parent_id,
                Category.kind == self.kind,
                Category.parent_id.is_(None),
            )
        ).first()
        if parent is None:
            raise NotFound("Parent category not found")

        chips_color = parent.children_bg_color
        if not chips_color:
            if parent.children:
                log.warning("Parent %s has children but no childrenBgColor", parent.id)
                raise DomainRuleError("Parent has no childrenBgColor configured")
            if not color:
                raise InvalidInput(
                    "childrenBgColor is required for the first subcategory of this parent"
                )
            chips_color = color

        child = Category(name=name, kind=self.kind, parent=parent, bg_color=chips_color)
        with atomic(self.session):
            if not parent.children_bg_color:
                parent.children_bg_color = chips_color
            self.session.add(child)
        log.info("Created %s subcategory %s under %s", self.kind.value, child.id, parent.id)
        return child

    def update(self, data) -> Category:
        """Rename or recolor a category.

        A new ``children_bg_color`` on a parent overwrites every child's color.
        Children ignore ``children_bg_color``.
        """
        category = self.get(data.id)

        with atomic(self.session):
            if data.name:
                category.name = data.name
            if data.bg_color:
                category.bg_color = data.bg_color
            if category.is_parent and data.children_bg_color:
                category.children_bg_color = data.children_bg_color
                for child in category.children:
                    child.bg_color = data.children_bg_color
        log.info("Updated %s category %s", self.kind.value, category.id)
        return category

    def count_transactions(self, category_ids) -> int:
        if not category_ids:
            return 0
        return self.session.scalar(
            select(func.count(Transaction.id))
            .join(Category, Transaction.category_id == Category.id)
            .where(Transaction.category_id.in_(category_ids), Category.kind == self.kind)
        )

    def delete(self, category_id: int) -> None:
        """Delete a category; a parent takes its children with it.

        Refused while the category, or any of its children, is referenced by a
        transaction.
        """
        category = self.get(category_id)

        if self.count_transactions([category.id]) > 0:
            log.warning("Refused to delete category %s: it has transactions", category.id)
            raise DomainRuleError(self.messages["has_transactions"])

        children = list(category.children) if category.is_parent else []
        if self.count_transactions([c.id for c in children]) > 0:
            log.warning("Refused to delete category %s: a child has transactions", category.id)
            raise DomainRuleError(self.messages["children_have_transactions"])

        with atomic(self.session):
            # children go through the delete-orphan cascade in the same flush
            self.session.delete(category)
        log.info(
            "Deleted %s category %s and %d subcategories",
            self.kind.value,
            category_id,
            len(children),
        )
