from blockhub.extensions import db
from blockhub.catalog.environments import environment_keys
from .base import BaseModel

class BlockVersion(BaseModel):
    __tablename__ = "block_versions"

    block_id = db.Column(db.String(36), db.ForeignKey("blocks.id"), nullable=False, index=True)
    version = db.Column(db.String(50), nullable=False)
    type = db.Column(db.String(20), nullable=False, default="package")  # package | config
    region = db.Column(db.String(20), nullable=False, default="default", index=True)
    changelog = db.Column(db.Text, nullable=False, default="")
    config = db.Column(db.JSON, nullable=False, default=dict)

    package_url = db.Column(db.String(512), nullable=True)
    package_size = db.Column(db.Integer, nullable=True)

    created_by = db.Column(db.String(100), nullable=False)
    approved_by = db.Column(db.String(100), nullable=True)
    approved_at = db.Column(db.DateTime(timezone=True), nullable=True)

    # Canonical per-environment state
    staging_status = db.Column(db.String(20), nullable=False, default="unpublished")
    production_status = db.Column(db.String(20), nullable=False, default="unpublished")
    staging_published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    production_published_at = db.Column(db.DateTime(timezone=True), nullable=True)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)  # first publication anywhere

    block = db.relationship("Block", back_populates="versions")

    __table_args__ = (
        db.UniqueConstraint("block_id", "region", "version", name="uq_block_region_version"),
        db.Index("idx_block_version_env", "block_id", "region"),
    )

    def status_for(self, environment):
        return getattr(self, f"{environment}_status")

    def set_status_for(self, environment, status):
        setattr(self, f"{environment}_status", status)

    def published_at_for(self, environment):
        return getattr(self, f"{environment}_published_at")

    def set_published_at_for(self, environment, value):
        setattr(self, f"{environment}_published_at", value)

    def is_live_in(self, environment):
        return self.status_for(environment) == "published"

    @property
    def environments(self):
        """Environments currently serving this version, in release order."""
        return [env for env in environment_keys() if self.is_live_in(env)]

    @property
    def status(self):
        """
        Legacy single-field status, derived from the per-environment state.
        """
        if self.environments:
            return "published"
        if self.production_status in ("pending", "approved"):
            return self.production_status
        return "draft"
