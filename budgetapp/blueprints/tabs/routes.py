from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ...http import json_body
from ...services import tabs

tabs_bp = Blueprint("tabs", __name__, url_prefix="/api/budgets/<budget_id>/tabs")


@tabs_bp.route("", methods=["GET"])
@login_required
def list_tabs(budget_id):
    rows = tabs.list_tabs(current_user.id, budget_id)
    return jsonify({"success": True, "tabs": [t.to_dict() for t in rows]})


@tabs_bp.route("", methods=["POST"])
@login_required
def create_tab(budget_id):
    data = json_body()
    tab = tabs.create_tab(
        current_user.id, budget_id, data.get("name"),
        description=data.get("description"),
        amount_allocated=data.get("amount_allocated"),
        color=data.get("color"),
        icon=data.get("icon"),
        position=data.get("position"),
    )
    return jsonify({"success": True, "message": "Tab created successfully", "tab": tab.to_dict()}), 201


@tabs_bp.route("/<tab_id>", methods=["PUT"])
@login_required
def update_tab(budget_id, tab_id):
    tab = tabs.update_tab(current_user.id, tab_id, json_body(), budget_id=budget_id)
    return jsonify({"success": True, "message": "Tab updated successfully", "tab": tab.to_dict()})


@tabs_bp.route("/<tab_id>", methods=["DELETE"])
@login_required
def delete_tab(budget_id, tab_id):
    tabs.delete_tab(current_user.id, tab_id, budget_id=budget_id)
    return jsonify({"success": True, "message": "Tab deleted successfully"})
