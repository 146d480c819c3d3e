import logging

from .. import authz
from ..errors import ValidationError
from ..extensions import db
from ..models import Expense, Tab
from . import commit, validation

logger = logging.getLogger(__name__)


def create_expense(caller_id, budget_id, tab_id, amount, description=None, expense_date=None):
    """Log an expense against a tab.

    The tab has to belong to the stated budget; there is no database
    constraint tying ``expenses.tab_id`` to ``expenses.budget_id`` so the check
    lives here.
    """
    budget = authz.owned_budget(caller_id, budget_id)

    if tab_id is None or tab_id == "":
        raise ValidationError("tab_id", "Tab ID is required")
    tab_id = validation.identifier(tab_id, "tab_id")
    amount = validation.amount(amount, "amount")
    tab = Tab.query.filter_by(id=tab_id, budget_id=budget.id).first()
    if tab is None:
        raise ValidationError("tab_id", "Tab not found or does not belong to this budget")
    spent_on = validation.iso_date(expense_date, "expense_date")

    expense = Expense(
        budget_id=budget.id,
        tab_id=tab.id,
        user_id=caller_id,
        amount=amount,
        description=validation.optional_text(description, "description"),
        expense_date=spent_on,
    )
    db.session.add(expense)
    commit()
    logger.info("Logged expense %s in budget %s", expense.id, budget.id)
    return expense


def list_expenses(caller_id, budget_id):
    budget = authz.owned_budget(caller_id, budget_id)
    return (
        authz.expenses_for(caller_id)
        .filter(Expense.budget_id == budget.id)
        .order_by(Expense.expense_date.desc(), Expense.created_at.desc())
        .all()
    )


def delete_expense(caller_id, expense_id, budget_id=None):
    expense = authz.owned_expense(caller_id, expense_id, budget_id)
    db.session.delete(expense)
    commit()
