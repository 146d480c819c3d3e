from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ...http import json_body
from ...services import expenses

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/budgets/<budget_id>/expenses")


@expenses_bp.route("", methods=["GET"])
@login_required
def list_expenses(budget_id):
    rows = expenses.list_expenses(current_user.id, budget_id)
    return jsonify({"success": True, "expenses": [e.to_dict() for e in rows]})


@expenses_bp.route("", methods=["POST"])
@login_required
def create_expense(budget_id):
    data = json_body()
    expense = expenses.create_expense(
        current_user.id, budget_id, data.get("tab_id"), data.get("amount"),
        description=data.get("description"), expense_date=data.get("expense_date"),
    )
    return jsonify({"success": True, "message": "Expense logged successfully", "expense": expense.to_dict()}), 201


@expenses_bp.route("/<expense_id>", methods=["DELETE"])
@login_required
def delete_expense(budget_id, expense_id):
    expenses.delete_expense(current_user.id, expense_id, budget_id=budget_id)
    return jsonify({"success": True, "message": "Expense deleted successfully"})
