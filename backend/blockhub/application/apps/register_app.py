# blockhub/application/apps/register_app.py
from typing import Optional
from flask import current_app
from blockhub.catalog.regions import ALL_REGIONS
from blockhub.domain.exceptions import ValidationError
from blockhub.models.app import App, AppMember
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional

DEFAULT_ICON_URL = "https://api.dicebear.com/7.x/shapes/svg?seed={name}"


def normalize_platform(platform: Optional[str]) -> str:
    """'all', a single platform, or a comma list with blanks and repeats dropped."""
    parts = [p.strip().lower() for p in (platform or "").split(",") if p.strip()]
    if not parts or "all" in parts:
        return "all"
    return ",".join(dict.fromkeys(parts))


def register_app(
    *,
    actor_id: str,
    name: str,
    description: str = "",
    platform: Optional[str] = None,
    icon: Optional[str] = None,
    actor_email: Optional[str] = None,
    stores: Optional[Stores] = None,
) -> App:
    """
    Register an app. The creator joins as its owner with access to
    every region.
    """
    if not name or not name.strip():
        raise ValidationError("App name is required")

    stores = stores or get_stores()

    with transactional(stores.session):
        app = App()
        app.name = name.strip()
        app.description = description or ""
        app.platform = normalize_platform(platform)
        app.icon = icon or DEFAULT_ICON_URL.format(name=app.name)
        app.status = "active"
        app.member_count = 1
        stores.apps.add(app)

        email = actor_email or actor_id
        owner = AppMember()
        owner.app_id = app.id
        owner.user_id = actor_id
        owner.user_email = email
        owner.user_name = email.split("@")[0]
        owner.role = "owner"
        owner.regions = [ALL_REGIONS]
        owner.joined_at = utcnow()
        stores.members.add(owner)

    current_app.logger.info("app.create app=%s actor=%s", app.id, actor_id)
    return app
