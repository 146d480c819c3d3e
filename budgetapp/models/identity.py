import secrets

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from ..extensions import db
from .base import new_id, utcnow


def new_nonce():
    return secrets.token_hex(16)


class Identity(UserMixin, db.Model):
    """Account record owned by the identity provider, not by the budgeting core."""

    __tablename__ = "auth_identities"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    session_nonce = db.Column(db.String(32), nullable=False, default=new_nonce)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    profile = db.relationship(
        "UserProfile", backref="identity", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {"id": self.id, "email": self.email, "created_at": self.created_at.isoformat()}
