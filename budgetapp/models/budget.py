from ..extensions import db
from .base import DEFAULT_CURRENCY, TimestampMixin, currency_constraints, iso, new_id


class Budget(TimestampMixin, db.Model):
    __tablename__ = "budgets"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(
        db.String(36), db.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    currency_code = db.Column(db.String(3), nullable=False, default=DEFAULT_CURRENCY)

    tabs = db.relationship(
        "Tab", backref="budget", lazy=True, order_by="Tab.position",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    expenses = db.relationship(
        "Expense", backref="budget", lazy=True,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __table_args__ = currency_constraints("budgets")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "currency_code": self.currency_code,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
