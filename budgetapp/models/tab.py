from ..extensions import db
from .base import TimestampMixin, iso, money, new_id


class Tab(TimestampMixin, db.Model):
    """A spending category inside a budget (e.g. "Food")."""

    __tablename__ = "budget_tabs"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    budget_id = db.Column(
        db.String(36), db.ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    color = db.Column(db.String(32))  # e.g. "#FF5733"
    icon = db.Column(db.String(64))
    amount_allocated = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    position = db.Column(db.Integer, nullable=False, default=0)

    expenses = db.relationship(
        "Expense", backref="tab", lazy=True,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __table_args__ = (
        db.UniqueConstraint("budget_id", "name", name="budget_tabs_budget_name_unique"),
        db.CheckConstraint("amount_allocated >= 0", name="budget_tabs_amount_allocated_check"),
        db.Index("budget_tabs_position_idx", "budget_id", "position"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "budget_id": self.budget_id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "icon": self.icon,
            "amount_allocated": money(self.amount_allocated),
            "position": self.position,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
