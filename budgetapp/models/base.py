import uuid
from datetime import datetime, timezone

from ..extensions import db

CURRENCY_PATTERN = r"^[A-Z]{3}$"
DEFAULT_CURRENCY = "USD"


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def iso(value):
    return value.isoformat() if value is not None else None


def money(value):
    return float(value) if value is not None else 0.0


def currency_constraints(table):
    # Postgres gets the regex, SQLite a GLOB with the same meaning
    name = f"{table}_currency_code_check"
    return (
        db.CheckConstraint(f"currency_code ~ '{CURRENCY_PATTERN}'", name=name).ddl_if(dialect="postgresql"),
        db.CheckConstraint("currency_code GLOB '[A-Z][A-Z][A-Z]'", name=name).ddl_if(dialect="sqlite"),
    )


class TimestampMixin:
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
