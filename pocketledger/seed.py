"""Default category tree and the ``flask seed-categories`` command."""

import click
from sqlalchemy import select

from .extensions import db
from .logger import get_logger
from .models import Category, CategoryKind

log = get_logger("seed")

DEFAULT_EXPENSE_TREE = {
    "Groceries": ["Pantry", "Produce", "Butcher", "Other"],
    "Fixed costs": ["Rent", "Electricity", "Gas", "Water", "Internet", "Phone", "Streaming", "Other"],
    "Education": ["University", "Courses", "Other"],
    "Leisure": ["Holidays", "Sport", "Restaurants", "Bars", "Delivery", "Other"],
    "Transport": ["Taxi", "Bus", "Other"],
    "Home": ["Furniture", "Appliances", "Repairs", "Decoration", "Other"],
    "Health": ["Pharmacy", "Personal care", "Emergencies", "Medical care", "Other"],
    "Taxes": ["Municipal", "Income tax"],
    "Car": ["Fuel", "Maintenance", "Other"],
    "Personal": ["Online shopping", "Other"],
}

# (parent bgColor, childrenBgColor), cycled in parent name order
PALETTE = [
    ("#1d4ed8", "#bfdbfe"),
    ("#047857", "#a7f3d0"),
    ("#b45309", "#fde68a"),
    ("#be123c", "#fecdd3"),
    ("#6d28d9", "#ddd6fe"),
    ("#0e7490", "#a5f3fc"),
]


def seed_categories(session, tree=None, kind=CategoryKind.EXPENSE) -> int:
    """Insert any missing parents/children from ``tree``. Returns rows created."""
    tree = DEFAULT_EXPENSE_TREE if tree is None else tree
    created = 0

    for index, parent_name in enumerate(sorted(tree)):
        bg_color, children_color = PALETTE[index % len(PALETTE)]
        parent = session.scalars(
            select(Category).where(
                Category.name == parent_name,
                Category.kind == kind,
                Category.parent_id.is_(None),
            )
        ).first()
        if parent is None:
            parent = Category(
                name=parent_name, kind=kind, bg_color=bg_color, children_bg_color=children_color
            )
            session.add(parent)
            created += 1

        existing = {c.name for c in parent.children}
        for child_name in tree[parent_name]:
            if child_name in existing:
                continue
            parent.children.append(
                Category(
                    name=child_name,
                    kind=kind,
                    bg_color=parent.children_bg_color or children_color,
                )
            )
            created += 1

    if created:
        session.commit()
    return created


def register_commands(app):
    @app.cli.command("seed-categories")
    def seed_categories_command():
        """Create the default expense category tree."""
        created = seed_categories(db.session)
        log.info("Seeded %d categories", created)
        click.echo(f"{created} categories created")
