from blockhub.extensions import db
from .base import BaseModel, utcnow

class App(BaseModel):
    __tablename__ = "apps"

    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")
    icon = db.Column(db.String(512), nullable=True)
    platform = db.Column(db.String(200), nullable=False, default="all")  # all | ios | "ios,android,web"
    status = db.Column(db.String(20), nullable=False, default="active")  # active | inactive
    member_count = db.Column(db.Integer, nullable=False, default=0)

    members = db.relationship(
        "AppMember",
        back_populates="app",
        order_by="AppMember.joined_at",
        cascade="all, delete-orphan",
    )
    blocks = db.relationship("Block", back_populates="app")


class AppMember(BaseModel):
    __tablename__ = "app_members"

    app_id = db.Column(db.String(36), db.ForeignKey("apps.id"), nullable=False, index=True)
    user_id = db.Column(db.String(100), nullable=False)
    user_name = db.Column(db.String(200), nullable=False)
    user_email = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="member")  # owner | admin | member
    avatar = db.Column(db.String(512), nullable=True)
    regions = db.Column(db.JSON, nullable=False, default=list)
    joined_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    app = db.relationship("App", back_populates="members")

    __table_args__ = (
        db.UniqueConstraint("app_id", "user_email", name="uq_app_member_email"),
    )
