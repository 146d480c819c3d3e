from ..extensions import db
from .base import DEFAULT_CURRENCY, TimestampMixin, currency_constraints, iso


class UserProfile(TimestampMixin, db.Model):
    __tablename__ = "user_profiles"
    id = db.Column(db.String(36), db.ForeignKey("auth_identities.id", ondelete="CASCADE"), primary_key=True)
    email = db.Column(db.String(255), unique=True, index=True)
    full_name = db.Column(db.String(255))
    display_name = db.Column(db.String(255))
    avatar_url = db.Column(db.Text)
    currency_code = db.Column(db.String(3), nullable=False, default=DEFAULT_CURRENCY)
    timezone = db.Column(db.String(64), nullable=False, default="UTC")
    # Not an ownership link, so no relationship; the FK nulls it when the budget goes.
    active_budget_id = db.Column(
        db.String(36),
        db.ForeignKey("budgets.id", ondelete="SET NULL", use_alter=True, name="user_profiles_budget_id_fkey"),
    )

    budgets = db.relationship(
        "Budget", backref="owner", lazy=True, foreign_keys="Budget.user_id",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    expenses = db.relationship(
        "Expense", backref="user", lazy=True,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __table_args__ = currency_constraints("user_profiles")

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "currency_code": self.currency_code,
            "timezone": self.timezone,
            "active_budget_id": self.active_budget_id,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
