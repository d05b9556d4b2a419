from blockhub.extensions import db
from .base import BaseModel

class Block(BaseModel):
    __tablename__ = "blocks"

    app_id = db.Column(db.String(36), db.ForeignKey("apps.id"), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")
    type = db.Column(db.String(20), nullable=False)  # component, page, module
    category = db.Column(db.String(100), nullable=False, default="")
    status = db.Column(db.String(20), nullable=False, default="draft", index=True)
    latest_version = db.Column(db.String(50), nullable=True)
    download_count = db.Column(db.Integer, nullable=False, default=0)
    created_by = db.Column(db.String(100), nullable=False)

    # Version string live in each environment; written only by release commands
    staging_version = db.Column(db.String(50), nullable=True)
    production_version = db.Column(db.String(50), nullable=True)

    app = db.relationship("App", back_populates="blocks")
    versions = db.relationship(
        "BlockVersion",
        back_populates="block",
        order_by="BlockVersion.created_at.desc()",
    )

    @property
    def app_name(self):
        return self.app.name if self.app else None

    def version_for(self, environment):
        return getattr(self, f"{environment}_version")

    def set_version_for(self, environment, version):
        setattr(self, f"{environment}_version", version)

