import logging

from .. import authz
from ..extensions import db
from ..models import SupportRequest
from . import commit, validation

logger = logging.getLogger(__name__)

ANONYMOUS_EMAIL = "anonymous@unknown.com"


def submit_support_request(caller_id, caller_email, subject, message, email=None):
    """File a support request. ``caller_id`` is None for anonymous callers."""
    subject = validation.required_text(subject, "subject", "Subject is required")
    message = validation.required_text(message, "message", "Message is required")
    contact = validation.optional_text(email, "email") or caller_email or ANONYMOUS_EMAIL

    support_request = SupportRequest(
        user_id=caller_id or None,
        email=contact,
        subject=subject,
        message=message,
    )
    db.session.add(support_request)
    commit()
    logger.info("Support request %s filed by %s", support_request.id, caller_id or "anonymous")
    return support_request


def list_support_requests(caller_id):
    rows = authz.support_requests_for(caller_id).order_by(SupportRequest.created_at.desc()).all()
    return [row for row in rows if authz.can_read_support_request(caller_id, row)]
