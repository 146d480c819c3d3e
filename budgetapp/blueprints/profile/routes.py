from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from ...http import json_body
from ...services import profiles

profile_bp = Blueprint("profile", __name__, url_prefix="/api/profile")


@profile_bp.route("", methods=["GET"])
@login_required
def show_profile():
    profile = profiles.get_profile(current_user.id)
    return jsonify({
        "success": True,
        "profile": profile.to_dict(),
        "user": {"id": current_user.id, "email": current_user.email},
    })


@profile_bp.route("", methods=["PUT"])
@login_required
def update_profile():
    profile = profiles.update_profile(current_user.id, json_body())
    return jsonify({"success": True, "message": "Profile updated successfully", "profile": profile.to_dict()})


@profile_bp.route("", methods=["DELETE"])
@login_required
def delete_account():
    profiles.delete_account(current_user.id)
    return jsonify({
        "success": True,
        "message": "Your account and all associated data have been deleted.",
    })
