from sqlalchemy import text
from blockhub.extensions import db
from .base import BaseModel, utcnow

class ApprovalRequest(BaseModel):
    __tablename__ = "approval_requests"

    block_id = db.Column(db.String(36), db.ForeignKey("blocks.id"), nullable=False, index=True)
    version_id = db.Column(db.String(36), db.ForeignKey("block_versions.id"), nullable=False, index=True)

    # Denormalized for display
    block_name = db.Column(db.String(200), nullable=False)
    version = db.Column(db.String(50), nullable=False)

    requested_by = db.Column(db.String(100), nullable=False)
    requested_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    status = db.Column(db.String(20), nullable=False, default="pending", index=True)  # pending | approved | rejected

    reviewed_by = db.Column(db.String(100), nullable=True)
    reviewed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    comment = db.Column(db.Text, nullable=True)

    __table_args__ = (
        # at most one open review per version
        db.Index(
            "uq_pending_request_per_version",
            "version_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )
