from datetime import date

from ..extensions import db
from .base import TimestampMixin, iso, money, new_id


class Expense(TimestampMixin, db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    budget_id = db.Column(
        db.String(36), db.ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    tab_id = db.Column(
        db.String(36), db.ForeignKey("budget_tabs.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id = db.Column(
        db.String(36), db.ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    description = db.Column(db.Text)
    expense_date = db.Column(db.Date, default=date.today, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="expenses_amount_check"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "budget_id": self.budget_id,
            "tab_id": self.tab_id,
            "user_id": self.user_id,
            "amount": money(self.amount),
            "description": self.description,
            "expense_date": iso(self.expense_date),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
