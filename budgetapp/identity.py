"""Local identity provider.

Stands in for the hosted auth service: it owns credentials and hands out
signed bearer tokens. The rest of the app only ever sees the verified
``Identity`` that Flask-Login places in ``current_user``.
"""
import logging

from flask import current_app
from itsdangerous import BadSignature, URLSafeTimedSerializer

from .errors import AuthenticationError, ConflictError, ValidationError
from .extensions import db, login_manager
from .models import Identity
from .models.identity import new_nonce
from .services import commit, validation

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
TOKEN_SALT = "budgetapp-access-token"


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def register_identity(email, password):
    if not email or not password:
        raise ValidationError(None, "Email and password are required")
    email = validation.email_address(email)
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if Identity.query.filter_by(email=email).first():
        raise ConflictError("An account with this email already exists. Please try logging in instead.")

    identity = Identity(email=email)
    identity.set_password(password)
    db.session.add(identity)
    commit(conflict_message="An account with this email already exists. Please try logging in instead.")
    logger.info("Registered identity %s", identity.id)
    return identity


def authenticate(email, password):
    if not email or not password:
        raise ValidationError(None, "Email and password are required")
    email = validation.email_address(email)
    identity = Identity.query.filter_by(email=email).first()
    if identity is None or not identity.check_password(password):
        raise AuthenticationError("Invalid email or password")
    return identity


def issue_token(identity) -> str:
    return _serializer().dumps({"sub": identity.id, "nonce": identity.session_nonce})


def verify_token(token):
    try:
        claims = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except BadSignature:
        return None
    if not isinstance(claims, dict):
        return None
    identity = db.session.get(Identity, claims.get("sub"))
    if identity is None or identity.session_nonce != claims.get("nonce"):
        return None
    return identity


def revoke_tokens(identity):
    identity.session_nonce = new_nonce()
    commit()


@login_manager.request_loader
def load_identity_from_request(request):
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    token = header[len("Bearer "):].strip()
    return verify_token(token) if token else None


@login_manager.unauthorized_handler
def reject_unauthenticated():
    raise AuthenticationError()
