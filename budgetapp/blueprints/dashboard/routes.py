from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ...services import profiles

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
@login_required
def index():
    summary = profiles.dashboard_summary(current_user.id)
    return jsonify({"success": True, **summary})
