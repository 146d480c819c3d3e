import logging
from dataclasses import dataclass
from decimal import Decimal

from flask import current_app
from sqlalchemy import func

from .. import authz
from ..errors import NotFoundError, ValidationError
from ..extensions import db
from ..models import Budget, Expense, Tab, UserProfile
from . import commit, validation

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class BudgetTotals:
    allocated: Decimal
    spent: Decimal

    @property
    def left(self) -> Decimal:
        return self.allocated - self.spent

    def to_dict(self):
        return {"allocated": float(self.allocated), "spent": float(self.spent), "left": float(self.left)}


def _as_decimal(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(validation.CENTS)


def _percentage(part, whole) -> float:
    if not whole:
        return 0.0
    return round(float(part) / float(whole) * 100, 1)


def create_budget(caller_id, name, description=None, currency_code=None):
    authz.require_caller(caller_id)
    profile = db.session.get(UserProfile, caller_id)
    if profile is None:
        raise NotFoundError("User profile does not exist. Please complete your profile setup.")

    name = validation.required_text(name, "name", "Budget name is required")
    description = validation.optional_text(description, "description")
    if currency_code in (None, ""):
        currency_code = current_app.config.get("DEFAULT_CURRENCY", "USD")
    currency_code = validation.currency_code(currency_code)

    budget = Budget(user_id=caller_id, name=name, description=description, currency_code=currency_code)
    db.session.add(budget)
    db.session.flush()
    if profile.active_budget_id is None:
        profile.active_budget_id = budget.id
    commit()
    logger.info("Created budget %s for user %s", budget.id, caller_id)
    return budget


def list_budgets(caller_id):
    authz.require_caller(caller_id)
    return authz.budgets_for(caller_id).order_by(Budget.created_at.desc()).all()


def update_budget(caller_id, budget_id, fields):
    budget = authz.owned_budget(caller_id, budget_id)

    updates = {}
    if "name" in fields:
        updates["name"] = validation.required_text(fields["name"], "name", "Budget name cannot be empty")
    if "description" in fields:
        updates["description"] = validation.optional_text(fields["description"], "description")
    if "currency_code" in fields:
        updates["currency_code"] = validation.currency_code(fields["currency_code"])
    if not updates:
        raise ValidationError(None, "No valid fields to update")

    for key, value in updates.items():
        setattr(budget, key, value)
    commit()
    return budget


def delete_budget(caller_id, budget_id):
    budget = authz.owned_budget(caller_id, budget_id)
    profile = db.session.get(UserProfile, caller_id)
    if profile is not None and profile.active_budget_id == budget.id:
        profile.active_budget_id = None
    db.session.delete(budget)
    commit()
    logger.info("Deleted budget %s for user %s", budget_id, caller_id)


def set_active_budget(caller_id, budget_id):
    budget = authz.owned_budget(caller_id, budget_id)
    profile = authz.owned_profile(caller_id)
    profile.active_budget_id = budget.id
    commit()
    return profile


def compute_totals(budget_id) -> BudgetTotals:
    allocated = db.session.query(func.coalesce(func.sum(Tab.amount_allocated), 0)).filter(
        Tab.budget_id == budget_id
    ).scalar()
    spent = db.session.query(func.coalesce(func.sum(Expense.amount), 0)).filter(
        Expense.budget_id == budget_id
    ).scalar()
    return BudgetTotals(allocated=_as_decimal(allocated), spent=_as_decimal(spent))


def budget_totals(caller_id, budget_id) -> BudgetTotals:
    budget = authz.owned_budget(caller_id, budget_id)
    return compute_totals(budget.id)


def spent_by_tab(budget_id):
    rows = (
        db.session.query(Expense.tab_id, func.coalesce(func.sum(Expense.amount), 0))
        .filter(Expense.budget_id == budget_id)
        .group_by(Expense.tab_id)
        .all()
    )
    return {tab_id: _as_decimal(total) for tab_id, total in rows}


def budget_detail(caller_id, budget_id):
    """Budget with its ordered tabs, per-tab spending, totals and chart slices."""
    budget = authz.owned_budget(caller_id, budget_id)
    tabs = Tab.query.filter_by(budget_id=budget.id).order_by(Tab.position, Tab.created_at).all()
    spent = spent_by_tab(budget.id)
    totals = compute_totals(budget.id)

    tab_rows = []
    chart = []
    for tab in tabs:
        allocated = _as_decimal(tab.amount_allocated)
        tab_spent = spent.get(tab.id, ZERO)
        row = tab.to_dict()
        row.update(
            amount_spent=float(tab_spent),
            amount_remaining=float(allocated - tab_spent),
            spent_percentage=_percentage(tab_spent, allocated),
        )
        tab_rows.append(row)
        chart.append({
            "tab_id": tab.id,
            "name": tab.name,
            "color": tab.color,
            "value": float(allocated),
            "percentage": _percentage(allocated, totals.allocated),
        })

    payload = budget.to_dict()
    payload.update(tabs=tab_rows, totals=totals.to_dict(), chart=chart)
    return payload
