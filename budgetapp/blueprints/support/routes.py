from flask import Blueprint, jsonify
from flask_login import current_user

from ...http import json_body
from ...services import support

support_bp = Blueprint("support", __name__, url_prefix="/api/support")


def _caller():
    # Support is open to anonymous visitors; a valid token just links the request
    if current_user.is_authenticated:
        return current_user.id, current_user.email
    return None, None


@support_bp.route("/contact", methods=["POST"])
def contact():
    data = json_body()
    caller_id, caller_email = _caller()
    support_request = support.submit_support_request(
        caller_id, caller_email, data.get("subject"), data.get("message"), email=data.get("email"),
    )
    return jsonify({
        "success": True,
        "message": "Your support request has been received. We will get back to you soon!",
        "request": support_request.to_dict(),
    }), 201


@support_bp.route("/requests", methods=["GET"])
def list_requests():
    caller_id, _ = _caller()
    rows = support.list_support_requests(caller_id)
    return jsonify({"success": True, "requests": [row.to_dict() for row in rows]})
