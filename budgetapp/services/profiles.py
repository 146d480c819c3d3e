import logging

from flask import current_app

from .. import authz
from ..errors import InternalError, ValidationError
from ..extensions import db
from ..models import Identity, UserProfile
from . import commit, validation
from .budgets import budget_detail

logger = logging.getLogger(__name__)


def default_display_name(email, full_name=None, display_name=None):
    return display_name or full_name or email.split("@")[0]


def create_profile_for_identity(identity, full_name=None, display_name=None):
    """Create the profile row for a freshly created identity.

    Runs right after signup. A failure is logged and swallowed: the login path
    calls ``ensure_profile`` and will create the row then.
    """
    full_name = (full_name or "").strip()
    display_name = (display_name or "").strip()
    profile = UserProfile(
        id=identity.id,
        email=identity.email,
        full_name=full_name,
        display_name=default_display_name(identity.email, full_name, display_name),
        currency_code=current_app.config.get("DEFAULT_CURRENCY", "USD"),
    )
    db.session.add(profile)
    try:
        commit()
    except InternalError:
        logger.warning("Profile creation failed for identity %s; deferring to next login", identity.id)
        return None
    return profile


def ensure_profile(identity):
    profile = db.session.get(UserProfile, identity.id)
    if profile is None:
        logger.warning("User profile not found for user %s; creating it", identity.id)
        profile = create_profile_for_identity(identity)
    return profile


def get_profile(caller_id):
    return authz.owned_profile(caller_id)


def update_profile(caller_id, fields):
    profile = authz.owned_profile(caller_id)

    updates = {}
    if "full_name" in fields:
        updates["full_name"] = validation.optional_text(fields["full_name"], "full_name")
    if "display_name" in fields:
        value = fields["display_name"]
        if isinstance(value, str) and value and not value.strip():
            raise ValidationError("display_name", "Display name cannot be empty")
        updates["display_name"] = validation.optional_text(value, "display_name")
    if "currency_code" in fields:
        value = fields["currency_code"]
        updates["currency_code"] = validation.currency_code(value) if value else "USD"
    if "timezone" in fields:
        updates["timezone"] = validation.optional_text(fields["timezone"], "timezone") or "UTC"
    if "avatar_url" in fields:
        updates["avatar_url"] = validation.optional_text(fields["avatar_url"], "avatar_url")
    if not updates:
        raise ValidationError(
            None,
            "No valid fields to update. You can update: full_name, display_name, currency_code, timezone, avatar_url",
        )

    for key, value in updates.items():
        setattr(profile, key, value)
    commit()
    return profile


def delete_account(caller_id):
    """Remove the identity; the profile and everything it owns cascade with it."""
    authz.require_caller(caller_id)
    identity = db.session.get(Identity, caller_id)
    authz.require(identity is not None, "Account")
    db.session.delete(identity)
    commit()
    logger.info("Deleted account %s", caller_id)


def dashboard_summary(caller_id):
    profile = authz.owned_profile(caller_id)
    budget_count = authz.budgets_for(caller_id).count()
    active = None
    if profile.active_budget_id:
        active = budget_detail(caller_id, profile.active_budget_id)
    return {
        "profile": profile.to_dict(),
        "budget_count": budget_count,
        "active_budget": active,
    }
