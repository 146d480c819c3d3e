import logging

from sqlalchemy import func

from .. import authz
from ..errors import ConflictError, ValidationError
from ..extensions import db
from ..models import Tab
from . import commit, validation

logger = logging.getLogger(__name__)

DUPLICATE_TAB = "A tab with this name already exists in this budget"


def next_position(budget_id) -> int:
    highest = db.session.query(func.max(Tab.position)).filter(Tab.budget_id == budget_id).scalar()
    return 0 if highest is None else highest + 1


def _ensure_unique_name(budget_id, name, exclude_id=None):
    query = Tab.query.filter(Tab.budget_id == budget_id, Tab.name == name)
    if exclude_id is not None:
        query = query.filter(Tab.id != exclude_id)
    if query.first() is not None:
        raise ConflictError(DUPLICATE_TAB)


def list_tabs(caller_id, budget_id):
    budget = authz.owned_budget(caller_id, budget_id)
    return authz.tabs_for(caller_id).filter(Tab.budget_id == budget.id).order_by(Tab.position, Tab.created_at).all()


def create_tab(caller_id, budget_id, name, description=None, amount_allocated=None,
               color=None, icon=None, position=None):
    budget = authz.owned_budget(caller_id, budget_id)

    name = validation.required_text(name, "name", "Tab name is required")
    if amount_allocated in (None, ""):
        amount_allocated = 0
    allocated = validation.amount(amount_allocated, "amount_allocated", allow_zero=True)
    if position is None:
        position = next_position(budget.id)
    else:
        position = validation.integer(position, "position")
    _ensure_unique_name(budget.id, name)

    tab = Tab(
        budget_id=budget.id,
        name=name,
        description=validation.optional_text(description, "description"),
        amount_allocated=allocated,
        color=validation.optional_text(color, "color"),
        icon=validation.optional_text(icon, "icon"),
        position=position,
    )
    db.session.add(tab)
    commit(conflict_message=DUPLICATE_TAB)
    logger.info("Created tab %s in budget %s", tab.id, budget.id)
    return tab


def update_tab(caller_id, tab_id, fields, budget_id=None):
    tab = authz.owned_tab(caller_id, tab_id, budget_id)

    updates = {}
    if "name" in fields:
        updates["name"] = validation.required_text(fields["name"], "name", "Tab name cannot be empty")
    for key in ("description", "color", "icon"):
        if key in fields:
            updates[key] = validation.optional_text(fields[key], key)
    if "amount_allocated" in fields:
        updates["amount_allocated"] = validation.amount(
            fields["amount_allocated"], "amount_allocated", allow_zero=True,
        )
    if "position" in fields:
        updates["position"] = validation.integer(fields["position"], "position")

    if "name" in updates:
        _ensure_unique_name(tab.budget_id, updates["name"], exclude_id=tab.id)
    if not updates:
        raise ValidationError(None, "No valid fields to update")

    for key, value in updates.items():
        setattr(tab, key, value)
    commit(conflict_message=DUPLICATE_TAB)
    return tab


def delete_tab(caller_id, tab_id, budget_id=None):
    tab = authz.owned_tab(caller_id, tab_id, budget_id)
    parent_id = tab.budget_id
    db.session.delete(tab)
    commit()
    logger.info("Deleted tab %s from budget %s", tab_id, parent_id)
