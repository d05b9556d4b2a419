"""Tests for the release commands: submit, review, publish and unpublish."""

import importlib
from datetime import datetime, timedelta, timezone

import pytest

from blockhub.application.blocks import archive_block, list_blocks
from blockhub.application.release import (
    approve_request,
    list_approval_requests,
    publish_version,
    reject_request,
    submit_approval,
    unpublish_version,
)
from blockhub.catalog.environments import PRODUCTION, STAGING, environment_keys
from blockhub.domain.exceptions import Conflict, InvalidState, InvariantViolation, NotFound, ValidationError
from blockhub.models.approval_request import ApprovalRequest
from blockhub.normalizers.block import normalize_block
from blockhub.normalizers.block_version import normalize_block_version


def assert_environment_consistency(version):
    for env in environment_keys():
        listed = env in version.environments
        live = version.status_for(env) == "published"
        stamped = version.published_at_for(env) is not None
        assert listed == live == stamped, env


def snapshot(stores, version_id):
    version = stores.versions.get(version_id)
    block = stores.blocks.get(version.block_id)
    return normalize_block_version(version), normalize_block(block)


@pytest.fixture
def approved_version(make_version):
    """A config version that has been through review."""

    def _make(**kwargs):
        version = make_version(**kwargs)
        request = submit_approval(version_id=version.id, actor_id="alice")
        approve_request(request_id=request.id, actor_id="rita")
        return version

    return _make


class TestSubmitApproval:
    def test_creates_pending_request(self, stores, make_version):
        version = make_version()

        request = submit_approval(version_id=version.id, actor_id="alice")

        assert request.status == "pending"
        assert request.requested_by == "alice"
        assert request.requested_at is not None
        assert request.version_id == version.id
        assert request.version == "1.0.0"
        assert request.block_name == "Hero Banner"

        version = stores.versions.get(version.id)
        assert version.production_status == "pending"
        assert version.status == "pending"
        assert stores.blocks.get(version.block_id).status == "pending"

    def test_second_submit_is_a_conflict(self, stores, make_version):
        version = make_version()
        submit_approval(version_id=version.id, actor_id="alice")

        with pytest.raises(Conflict):
            submit_approval(version_id=version.id, actor_id="bob")

        pending = list_approval_requests(status="pending")
        assert pending.total == 1
        assert pending.items[0].requested_by == "alice"

    def test_missing_version(self, app):
        with pytest.raises(NotFound):
            submit_approval(version_id="nope", actor_id="alice")

    def test_resubmit_after_rejection_opens_new_request(self, stores, make_version):
        version = make_version()
        first = submit_approval(version_id=version.id, actor_id="alice")
        reject_request(request_id=first.id, actor_id="rita", comment="changelog is empty")

        second = submit_approval(version_id=version.id, actor_id="alice")

        assert second.id != first.id
        assert stores.versions.get(version.id).production_status == "pending"
        assert list_approval_requests().total == 2
        assert list_approval_requests(status="pending").items[0].id == second.id

    def test_archived_block_refuses_submission(self, make_block, make_version):
        block = make_block()
        version = make_version(block=block)
        archive_block(block_id=block.id, actor_id="alice")

        with pytest.raises(InvalidState):
            submit_approval(version_id=version.id, actor_id="alice")

    def test_live_production_version_cannot_be_resubmitted(self, approved_version):
        version = approved_version()
        publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        with pytest.raises(InvalidState):
            submit_approval(version_id=version.id, actor_id="alice")

    def test_new_version_of_a_live_block_puts_it_back_in_review(self, stores, make_block, make_version, approved_version):
        block = make_block()
        live = approved_version(block=block, version="1.0.0")
        publish_version(version_id=live.id, environment=PRODUCTION, actor_id="alice")
        candidate = make_version(block=block, version="1.1.0")

        submit_approval(version_id=candidate.id, actor_id="alice")

        block = stores.blocks.get(block.id)
        assert block.status == "pending"
        assert block.production_version == "1.0.0"
        assert [b.id for b in list_blocks(status="pending").items] == [block.id]

        request = stores.approvals.pending_for_version(candidate.id)
        approve_request(request_id=request.id, actor_id="rita")

        assert stores.blocks.get(block.id).status == "approved"


class TestReview:
    def test_approve(self, stores, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")

        approved = approve_request(request_id=request.id, actor_id="rita", comment="ship it")

        assert approved.status == "approved"
        assert approved.reviewed_by == "rita"
        assert approved.reviewed_at is not None
        assert approved.comment == "ship it"

        version = stores.versions.get(version.id)
        assert version.production_status == "approved"
        assert version.status == "approved"
        assert version.approved_by == "rita"
        assert stores.blocks.get(version.block_id).status == "approved"

    def test_approve_comment_is_optional(self, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")

        approved = approve_request(request_id=request.id, actor_id="rita")

        assert approved.comment is None

    def test_approve_missing_request(self, app):
        with pytest.raises(NotFound):
            approve_request(request_id="nope", actor_id="rita")

    def test_cannot_approve_twice(self, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")
        approve_request(request_id=request.id, actor_id="rita")

        with pytest.raises(InvalidState):
            approve_request(request_id=request.id, actor_id="rita")

    @pytest.mark.parametrize("comment", [None, "", "   "])
    def test_reject_requires_comment(self, stores, make_version, comment):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")

        with pytest.raises(ValidationError):
            reject_request(request_id=request.id, actor_id="rita", comment=comment)

        assert stores.approvals.get(request.id).status == "pending"
        assert stores.versions.get(version.id).production_status == "pending"

    def test_reject(self, stores, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")

        rejected = reject_request(request_id=request.id, actor_id="rita", comment="  needs QA  ")

        assert rejected.status == "rejected"
        assert rejected.reviewed_by == "rita"
        assert rejected.comment == "needs QA"
        assert stores.versions.get(version.id).production_status == "rejected"
        # block keeps what submission gave it
        assert stores.blocks.get(version.block_id).status == "pending"

    def test_reject_missing_request(self, app):
        with pytest.raises(NotFound):
            reject_request(request_id="nope", actor_id="rita", comment="no")

    def test_cannot_reject_an_approved_request(self, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")
        approve_request(request_id=request.id, actor_id="rita")

        with pytest.raises(InvalidState):
            reject_request(request_id=request.id, actor_id="rita", comment="too late")


class TestPublish:
    def test_production_requires_approval(self, stores, make_version):
        version = make_version()

        with pytest.raises(InvalidState) as exc:
            publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert exc.value.environment == PRODUCTION
        assert "Production" in str(exc.value)
        assert stores.versions.get(version.id).environments == []

    def test_production_publish_succeeds_after_approval(self, stores, make_version):
        version = make_version()
        request = submit_approval(version_id=version.id, actor_id="alice")

        with pytest.raises(InvalidState):
            publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        approve_request(request_id=request.id, actor_id="rita")
        published = publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert published.environments == [PRODUCTION]
        assert published.production_status == "published"
        assert_environment_consistency(published)

    def test_staging_has_no_gate(self, stores, make_version):
        version = make_version()

        published = publish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        assert published.environments == [STAGING]
        assert published.staging_status == "published"
        assert published.staging_published_at is not None
        assert published.published_at is not None
        assert published.status == "published"
        assert_environment_consistency(published)

        block = stores.blocks.get(version.block_id)
        assert block.staging_version == "1.0.0"
        assert block.production_version is None
        assert block.status == "published"

    def test_staging_publication_does_not_open_production(self, make_version):
        version = make_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        with pytest.raises(InvalidState):
            publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

    def test_double_publish_is_a_conflict_without_drift(self, stores, make_version):
        version = make_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")
        before = snapshot(stores, version.id)

        with pytest.raises(Conflict) as exc:
            publish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        assert exc.value.environment == STAGING
        assert "Staging" in str(exc.value)
        assert snapshot(stores, version.id) == before

    def test_double_publish_to_production(self, stores, approved_version):
        version = approved_version()
        publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")
        before = snapshot(stores, version.id)

        with pytest.raises(Conflict) as exc:
            publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert "Production" in str(exc.value)
        assert snapshot(stores, version.id) == before

    def test_unknown_environment(self, make_version):
        version = make_version()

        with pytest.raises(ValidationError):
            publish_version(version_id=version.id, environment="qa", actor_id="alice")

    def test_region_must_match_version(self, make_version):
        version = make_version(region="cn")

        with pytest.raises(ValidationError):
            publish_version(version_id=version.id, environment=STAGING, region="us", actor_id="alice")

        published = publish_version(version_id=version.id, environment=STAGING, region="cn", actor_id="alice")
        assert published.environments == [STAGING]

    def test_all_regions_request_matches_any_version(self, make_version):
        version = make_version(region="cn")

        published = publish_version(version_id=version.id, environment=STAGING, region="*", actor_id="alice")

        assert published.environments == [STAGING]
        assert published.region == "cn"

    def test_missing_version(self, app):
        with pytest.raises(NotFound):
            publish_version(version_id="nope", environment=STAGING, actor_id="alice")

    def test_first_publication_time_is_kept(self, stores, approved_version):
        version = approved_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")
        first = stores.versions.get(version.id).published_at

        publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert stores.versions.get(version.id).published_at == first

    def test_new_version_takes_over_the_region_slot(self, stores, make_block, approved_version):
        block = make_block()
        v1 = approved_version(block=block, version="1.0.0")
        v2 = approved_version(block=block, version="1.1.0")

        publish_version(version_id=v1.id, environment=PRODUCTION, actor_id="alice")
        publish_version(version_id=v2.id, environment=PRODUCTION, actor_id="alice")

        v1 = stores.versions.get(v1.id)
        v2 = stores.versions.get(v2.id)
        assert v1.environments == []
        assert v1.production_status == "approved"
        assert v1.production_published_at is None
        assert v2.environments == [PRODUCTION]
        assert stores.blocks.get(block.id).production_version == "1.1.0"
        assert_environment_consistency(v1)
        assert_environment_consistency(v2)

    def test_region_lineages_are_independent(self, stores, make_block, approved_version):
        block = make_block()
        cn = approved_version(block=block, version="1.0.0", region="cn")
        us = approved_version(block=block, version="2.0.0", region="us")

        publish_version(version_id=cn.id, environment=PRODUCTION, actor_id="alice")
        publish_version(version_id=us.id, environment=PRODUCTION, actor_id="alice")

        assert stores.versions.get(cn.id).environments == [PRODUCTION]
        assert stores.versions.get(us.id).environments == [PRODUCTION]
        assert stores.blocks.get(block.id).production_version == "2.0.0"

        unpublish_version(version_id=us.id, environment=PRODUCTION, actor_id="alice")

        assert stores.blocks.get(block.id).production_version == "1.0.0"

    def test_failed_post_check_rolls_everything_back(self, monkeypatch, stores, make_version):
        module = importlib.import_module("blockhub.application.release.publish_version")

        def boom(*args, **kwargs):
            raise InvariantViolation("forced")

        version = make_version()
        before = snapshot(stores, version.id)
        monkeypatch.setattr(module, "assert_block_pointers", boom)

        with pytest.raises(InvariantViolation):
            module.publish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        assert snapshot(stores, version.id) == before


class TestUnpublish:
    def test_not_published_is_a_conflict_without_change(self, stores, make_version):
        version = make_version()
        before = snapshot(stores, version.id)

        with pytest.raises(Conflict) as exc:
            unpublish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert exc.value.environment == PRODUCTION
        assert "Production" in str(exc.value)
        assert snapshot(stores, version.id) == before

    def test_double_unpublish(self, make_version):
        version = make_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")
        unpublish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        with pytest.raises(Conflict):
            unpublish_version(version_id=version.id, environment=STAGING, actor_id="alice")

    def test_missing_version(self, app):
        with pytest.raises(NotFound):
            unpublish_version(version_id="nope", environment=STAGING, actor_id="alice")

    def test_last_environment_reverts_to_approved(self, stores, approved_version):
        version = approved_version()
        publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        result = unpublish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert result.environments == []
        assert result.production_status == "approved"
        assert result.production_published_at is None
        assert result.status == "approved"
        assert stores.blocks.get(version.block_id).production_version is None
        assert_environment_consistency(result)

    def test_one_of_two_environments(self, stores, approved_version):
        version = approved_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")
        publish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")
        staged_at = stores.versions.get(version.id).staging_published_at

        result = unpublish_version(version_id=version.id, environment=PRODUCTION, actor_id="alice")

        assert result.environments == [STAGING]
        assert result.status == "published"
        assert result.staging_status == "published"
        assert result.staging_published_at == staged_at

        block = stores.blocks.get(version.block_id)
        assert block.staging_version == "1.0.0"
        assert block.production_version is None
        assert_environment_consistency(result)

    def test_unreviewed_staging_version_keeps_its_approval_state(self, make_version):
        version = make_version()
        publish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        result = unpublish_version(version_id=version.id, environment=STAGING, actor_id="alice")

        assert result.staging_status == "unpublished"
        assert result.production_status == "unpublished"
        assert result.status == "draft"


class TestListApprovalRequests:
    def _insert(self, db, version, requested_at, status="approved"):
        request = ApprovalRequest()
        request.block_id = version.block_id
        request.block_name = "Hero Banner"
        request.version_id = version.id
        request.version = version.version
        request.requested_by = "alice"
        request.requested_at = requested_at
        request.status = status
        db.session.add(request)
        db.session.commit()
        return request

    def test_sorted_by_requested_at_descending(self, db, make_version):
        version = make_version()
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        middle = self._insert(db, version, base + timedelta(hours=2))
        oldest = self._insert(db, version, base)
        newest = self._insert(db, version, base + timedelta(days=1), status="pending")

        result = list_approval_requests()

        assert [r.id for r in result.items] == [newest.id, middle.id, oldest.id]

    def test_status_filter_and_pagination(self, db, make_version):
        version = make_version()
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        for hour in range(5):
            self._insert(db, version, base + timedelta(hours=hour), status="rejected")
        self._insert(db, version, base + timedelta(days=2), status="pending")

        result = list_approval_requests(status="rejected", page=2, page_size=2)

        assert result.total == 5
        assert result.page == 2
        assert result.page_size == 2
        assert result.total_pages == 3
        assert [r.requested_at.hour for r in result.items] == [2, 1]

    def test_unknown_status(self, app):
        with pytest.raises(ValidationError):
            list_approval_requests(status="cancelled")
