import pytest

from blockhub.application.apps import (
    add_member,
    app_stats,
    get_my_membership,
    list_apps,
    list_members,
    register_app,
    remove_member,
    update_member,
)
from blockhub.application.apps.register_app import normalize_platform
from blockhub.domain.exceptions import Conflict, InvalidState, NotFound, ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "all"),
        ("ios, android", "ios,android"),
        ("iOS,ios,web", "ios,web"),
        ("web,all", "all"),
    ],
)
def test_normalize_platform(raw, expected):
    assert normalize_platform(raw) == expected


class TestApps:
    def test_creator_becomes_owner(self, stores):
        app = register_app(actor_id="owner-1", actor_email="owner@example.com", name="Storefront")

        members = list_members(app_id=app.id)
        assert app.member_count == 1
        assert members.total == 1
        owner = members.items[0]
        assert owner.role == "owner"
        assert owner.user_email == "owner@example.com"
        assert owner.regions == ["*"]

    def test_name_required(self, app):
        with pytest.raises(ValidationError):
            register_app(actor_id="owner-1", name="   ")

    def test_listing(self, make_app):
        make_app(name="Storefront")
        make_app(name="Back Office")

        assert list_apps(keyword="office").total == 1
        assert app_stats() == {"total": 2}


class TestMembers:
    def test_add_member(self, stores, make_app):
        app = make_app()

        member = add_member(app_id=app.id, actor_id="owner-1", user_email="dev@example.com", regions=[])

        assert member.role == "member"
        assert member.user_name == "dev"
        assert member.regions == ["default"]
        assert stores.apps.get(app.id).member_count == 2

    def test_regions_are_normalized(self, make_app):
        app = make_app()

        member = add_member(
            app_id=app.id,
            actor_id="owner-1",
            user_email="ops@example.com",
            regions=["cn", "us", "*"],
        )

        assert member.regions == ["*"]

    def test_unknown_region(self, make_app):
        app = make_app()

        with pytest.raises(ValidationError):
            add_member(app_id=app.id, actor_id="owner-1", user_email="ops@example.com", regions=["mars"])

    def test_duplicate_email(self, make_app):
        app = make_app()
        add_member(app_id=app.id, actor_id="owner-1", user_email="dev@example.com")

        with pytest.raises(Conflict):
            add_member(app_id=app.id, actor_id="owner-1", user_email="DEV@example.com")

    def test_update_regions(self, make_app):
        app = make_app()
        member = add_member(app_id=app.id, actor_id="owner-1", user_email="dev@example.com")

        member = update_member(app_id=app.id, member_id=member.id, actor_id="owner-1", regions=["cn", "cn", "hk"])

        assert member.regions == ["cn", "hk"]

    def test_last_owner_is_kept(self, make_app):
        app = make_app()
        owner = list_members(app_id=app.id).items[0]

        with pytest.raises(InvalidState):
            update_member(app_id=app.id, member_id=owner.id, actor_id="owner-1", role="member")
        with pytest.raises(InvalidState):
            remove_member(app_id=app.id, member_id=owner.id, actor_id="owner-1")

    def test_remove_member(self, stores, make_app):
        app = make_app()
        member = add_member(app_id=app.id, actor_id="owner-1", user_email="dev@example.com")

        remove_member(app_id=app.id, member_id=member.id, actor_id="owner-1")

        assert stores.members.get(member.id) is None
        assert stores.apps.get(app.id).member_count == 1

    def test_member_of_another_app(self, make_app):
        first = make_app(name="First")
        second = make_app(name="Second")
        member = add_member(app_id=first.id, actor_id="owner-1", user_email="dev@example.com")

        with pytest.raises(NotFound):
            remove_member(app_id=second.id, member_id=member.id, actor_id="owner-1")

    def test_my_membership(self, make_app):
        app = make_app(actor_id="owner-1")

        assert get_my_membership(app_id=app.id, actor_id="owner-1").role == "owner"
        with pytest.raises(NotFound):
            get_my_membership(app_id=app.id, actor_id="stranger")
