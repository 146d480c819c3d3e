"""Row ownership rules.

Every table gets a predicate of the form "caller may see/write this row iff
the caller is the row's owner". Tabs have no owner column and inherit the
owner of their budget. Support requests are the one relaxed table: anyone may
file one, and rows filed anonymously are readable by every caller.

A failed predicate is reported as ``AuthorizationError``, which renders the
same as a missing row so callers cannot probe for ids they do not own.
"""
from sqlalchemy import or_

from .errors import AuthenticationError, AuthorizationError
from .extensions import db
from .models import Budget, Expense, SupportRequest, Tab, UserProfile


def require_caller(caller_id):
    if not caller_id:
        raise AuthenticationError()
    return caller_id


def require(allowed, what="Resource"):
    if not allowed:
        raise AuthorizationError(f"{what} not found or you do not have permission to access it")


def can_access_profile(caller_id, profile) -> bool:
    return profile is not None and profile.id == caller_id


def can_access_budget(caller_id, budget) -> bool:
    return budget is not None and budget.user_id == caller_id


def can_access_tab(caller_id, tab) -> bool:
    return tab is not None and can_access_budget(caller_id, tab.budget)


def can_access_expense(caller_id, expense) -> bool:
    return expense is not None and expense.user_id == caller_id


def can_read_support_request(caller_id, support_request) -> bool:
    if support_request is None:
        return False
    # TODO: anonymous rows are readable by everyone; decide whether that is intended
    return support_request.user_id is None or support_request.user_id == caller_id


def budgets_for(caller_id):
    return Budget.query.filter(Budget.user_id == caller_id)


def tabs_for(caller_id):
    return Tab.query.join(Budget, Tab.budget_id == Budget.id).filter(Budget.user_id == caller_id)


def expenses_for(caller_id):
    return Expense.query.filter(Expense.user_id == caller_id)


def support_requests_for(caller_id):
    """SQL form of ``can_read_support_request``; callers still gate rows with the predicate."""
    visible = SupportRequest.user_id.is_(None)
    if caller_id:
        visible = or_(visible, SupportRequest.user_id == caller_id)
    return SupportRequest.query.filter(visible)


def owned_profile(caller_id):
    require_caller(caller_id)
    profile = db.session.get(UserProfile, caller_id)
    require(can_access_profile(caller_id, profile), "Profile")
    return profile


def owned_budget(caller_id, budget_id):
    require_caller(caller_id)
    budget = db.session.get(Budget, budget_id) if budget_id else None
    require(can_access_budget(caller_id, budget), "Budget")
    return budget


def owned_tab(caller_id, tab_id, budget_id=None):
    require_caller(caller_id)
    tab = db.session.get(Tab, tab_id) if tab_id else None
    if tab is not None and budget_id is not None and tab.budget_id != budget_id:
        tab = None
    require(can_access_tab(caller_id, tab), "Tab")
    return tab


def owned_expense(caller_id, expense_id, budget_id=None):
    require_caller(caller_id)
    expense = db.session.get(Expense, expense_id) if expense_id else None
    if expense is not None and budget_id is not None and expense.budget_id != budget_id:
        expense = None
    require(can_access_expense(caller_id, expense), "Expense")
    return expense
