from ..extensions import db
from .base import TimestampMixin, iso, new_id

SUPPORT_STATUSES = ("open", "in_progress", "resolved", "closed")


class SupportRequest(TimestampMixin, db.Model):
    __tablename__ = "support_requests"
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    user_id = db.Column(
        db.String(36), db.ForeignKey("user_profiles.id", ondelete="SET NULL"), index=True,
    )
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="open", index=True)

    __table_args__ = (
        db.CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in SUPPORT_STATUSES)),
            name="support_requests_status_check",
        ),
        db.Index("support_requests_created_at_idx", "created_at"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "status": self.status,
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }
