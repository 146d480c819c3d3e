from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ...http import json_body
from ...services import budgets

budgets_bp = Blueprint("budgets", __name__, url_prefix="/api/budgets")


@budgets_bp.route("", methods=["GET"])
@login_required
def list_budgets():
    rows = budgets.list_budgets(current_user.id)
    return jsonify({"success": True, "budgets": [b.to_dict() for b in rows], "count": len(rows)})


@budgets_bp.route("", methods=["POST"])
@login_required
def create_budget():
    data = json_body()
    budget = budgets.create_budget(
        current_user.id, data.get("name"),
        description=data.get("description"), currency_code=data.get("currency_code"),
    )
    return jsonify({"success": True, "message": "Budget created successfully", "budget": budget.to_dict()}), 201


@budgets_bp.route("/<budget_id>", methods=["GET"])
@login_required
def show_budget(budget_id):
    return jsonify({"success": True, "budget": budgets.budget_detail(current_user.id, budget_id)})


@budgets_bp.route("/<budget_id>", methods=["PUT"])
@login_required
def update_budget(budget_id):
    budget = budgets.update_budget(current_user.id, budget_id, json_body())
    return jsonify({"success": True, "message": "Budget updated successfully", "budget": budget.to_dict()})


@budgets_bp.route("/<budget_id>", methods=["DELETE"])
@login_required
def delete_budget(budget_id):
    budgets.delete_budget(current_user.id, budget_id)
    return jsonify({"success": True, "message": "Budget deleted successfully"})


@budgets_bp.route("/<budget_id>/activate", methods=["POST"])
@login_required
def activate_budget(budget_id):
    profile = budgets.set_active_budget(current_user.id, budget_id)
    return jsonify({"success": True, "message": "Active budget updated", "profile": profile.to_dict()})


@budgets_bp.route("/<budget_id>/totals", methods=["GET"])
@login_required
def budget_totals(budget_id):
    totals = budgets.budget_totals(current_user.id, budget_id)
    return jsonify({"success": True, "totals": totals.to_dict()})
