import enum
from datetime import datetime
from ..extensions import db


class CategoryKind(str, enum.Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"

    @classmethod
    def parse(cls, raw, default=None):
        """Case-insensitive lookup; unknown or empty values give ``default``."""
        if not raw or not isinstance(raw, str):
            return default
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return default


def text_color_for_bg(hex_color):
    """Readable text color for a ``#rrggbb`` background."""
    if not hex_color or not hex_color.startswith("#") or len(hex_color) != 7:
        return "#111827"
    try:
        r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    except ValueError:
        return "#111827"
    luminance = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255
    return "#111827" if luminance > 0.6 else "#ffffff"


class Category(db.Model):
    __tablename__ = "categories"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    kind = db.Column(db.Enum(CategoryKind, name="category_kind"), nullable=False, index=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True, index=True)
    bg_color = db.Column(db.String(20))
    children_bg_color = db.Column(db.String(20))  # only meaningful on parents
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    parent = db.relationship("Category", remote_side=[id], back_populates="children")
    children = db.relationship(
        "Category",
        back_populates="parent",
        order_by="Category.name",
        cascade="all, delete-orphan",
        lazy=True,
    )
    transactions = db.relationship("Transaction", back_populates="category", lazy=True)

    @property
    def is_parent(self):
        return self.parent_id is None

    def to_dict(self, with_children=False):
        data = {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "parentId": self.parent_id,
            "bgColor": self.bg_color,
            "childrenBgColor": self.children_bg_color,
            "textColor": text_color_for_bg(self.bg_color),
        }
        if with_children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def __repr__(self):
        return f"<Category {self.kind.value}:{self.name}>"
