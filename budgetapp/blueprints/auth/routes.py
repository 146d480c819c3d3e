from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required

from ...http import json_body
from ... import identity as identity_provider
from ...services import profiles

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(identity):
    return {
        "access_token": identity_provider.issue_token(identity),
        "token_type": "bearer",
        "expires_in": current_app.config["TOKEN_MAX_AGE"],
    }


@auth_bp.route("/signup", methods=["POST"])
def signup():
    data = json_body()
    identity = identity_provider.register_identity(data.get("email"), data.get("password"))
    profile = profiles.create_profile_for_identity(
        identity, full_name=data.get("full_name"), display_name=data.get("display_name"),
    )
    return jsonify({
        "success": True,
        "message": "Account created successfully",
        "user": identity.to_dict(),
        "session": _session_payload(identity),
        "profile": profile.to_dict() if profile else None,
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    identity = identity_provider.authenticate(data.get("email"), data.get("password"))
    profile = profiles.ensure_profile(identity)
    return jsonify({
        "success": True,
        "message": "Login successful",
        "user": identity.to_dict(),
        "session": _session_payload(identity),
        "profile": profile.to_dict() if profile else None,
    })


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    identity_provider.revoke_tokens(current_user._get_current_object())
    return jsonify({"success": True, "message": "Logout successful"})
