# blockhub/application/apps/members.py
from typing import Iterable, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from blockhub.catalog.regions import is_known_region, normalize_regions
from blockhub.domain.exceptions import Conflict, InvalidState, NotFound, ValidationError
from blockhub.models.app import AppMember
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.pagination import PageResult
from blockhub.utils.transaction import transactional

MEMBER_ROLES = ("owner", "admin", "member")
AVATAR_URL = "https://api.dicebear.com/7.x/avatars/svg?seed={email}"


def _validated_regions(regions: Optional[Iterable[str]]) -> list[str]:
    normalized = normalize_regions(regions)
    unknown = [key for key in normalized if not is_known_region(key)]
    if unknown:
        raise ValidationError(f"Unknown region(s): {', '.join(unknown)}")
    return normalized


def _validated_role(role: str) -> str:
    if role not in MEMBER_ROLES:
        raise ValidationError(f"Unknown member role: {role}")
    return role


def add_member(
    *,
    app_id: str,
    actor_id: str,
    user_email: str,
    role: str = "member",
    regions: Optional[Iterable[str]] = None,
    user_id: Optional[str] = None,
    stores: Optional[Stores] = None,
) -> AppMember:
    if not user_email or "@" not in user_email:
        raise ValidationError("A valid userEmail is required")
    role = _validated_role(role)
    region_keys = _validated_regions(regions)

    stores = stores or get_stores()

    try:
        with transactional(stores.session):
            app = stores.apps.require(app_id, for_update=True)

            if stores.members.find_by_email(app.id, user_email) is not None:
                raise Conflict(f"{user_email} is already a member of {app.name}")

            member = AppMember()
            member.app_id = app.id
            member.user_id = user_id or user_email
            member.user_email = user_email
            member.user_name = user_email.split("@")[0]
            member.role = role
            member.avatar = AVATAR_URL.format(email=user_email)
            member.regions = region_keys
            member.joined_at = utcnow()
            stores.members.add(member)

            app.member_count = (app.member_count or 0) + 1
    except IntegrityError as exc:
        raise Conflict(f"{user_email} is already a member of this app") from exc

    current_app.logger.info("app.member.add app=%s member=%s actor=%s", app_id, member.id, actor_id)
    return member


def _require_member(stores: Stores, app_id: str, member_id: str, *, for_update: bool = False) -> AppMember:
    member = stores.members.get_for_update(member_id) if for_update else stores.members.get(member_id)
    if member is None or member.app_id != app_id:
        raise NotFound(f"Member {member_id} not found")
    return member


def _owner_count(stores: Stores, app_id: str) -> int:
    return sum(1 for m in stores.members.all_for_app(app_id) if m.role == "owner")


def update_member(
    *,
    app_id: str,
    member_id: str,
    actor_id: str,
    role: Optional[str] = None,
    regions: Optional[Iterable[str]] = None,
    stores: Optional[Stores] = None,
) -> AppMember:
    if role is None and regions is None:
        raise ValidationError("No valid fields provided for update")
    if role is not None:
        _validated_role(role)
    region_keys = _validated_regions(regions) if regions is not None else None

    stores = stores or get_stores()

    with transactional(stores.session):
        stores.apps.require(app_id, for_update=True)
        member = _require_member(stores, app_id, member_id, for_update=True)

        if role is not None and member.role == "owner" and role != "owner" and _owner_count(stores, app_id) == 1:
            raise InvalidState("An app must keep at least one owner")

        if role is not None:
            member.role = role
        if region_keys is not None:
            member.regions = region_keys

    current_app.logger.info("app.member.update app=%s member=%s actor=%s", app_id, member_id, actor_id)
    return member


def remove_member(
    *,
    app_id: str,
    member_id: str,
    actor_id: str,
    stores: Optional[Stores] = None,
) -> None:
    stores = stores or get_stores()

    with transactional(stores.session):
        app = stores.apps.require(app_id, for_update=True)
        member = _require_member(stores, app_id, member_id, for_update=True)

        if member.role == "owner" and _owner_count(stores, app_id) == 1:
            raise InvalidState("An app must keep at least one owner")

        stores.session.delete(member)
        app.member_count = max((app.member_count or 0) - 1, 0)
        app.updated_at = utcnow()

    current_app.logger.info("app.member.remove app=%s member=%s actor=%s", app_id, member_id, actor_id)


def list_members(
    *,
    app_id: str,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    stores: Optional[Stores] = None,
) -> PageResult[AppMember]:
    stores = stores or get_stores()
    stores.apps.require(app_id)
    return stores.members.list_for_app(app_id, page=page, page_size=page_size)


def get_my_membership(*, app_id: str, actor_id: str, stores: Optional[Stores] = None) -> AppMember:
    stores = stores or get_stores()
    stores.apps.require(app_id)

    member = stores.members.find_by_user(app_id, actor_id)
    if member is None:
        raise NotFound(f"{actor_id} is not a member of app {app_id}")
    return member
