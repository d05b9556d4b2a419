# blockhub/domain/release.py
"""
Release decisions for block versions.

Every ``check_*`` function validates a command against the current state
and raises without touching anything. The matching ``apply_*`` function
assumes its check passed and mutates the in-memory models; persisting
them is the caller's job. Keeping the two apart is what lets a rejected
command leave every store untouched.

A version's state has two axes:

- approval, held by the gated environment (production) while it is not
  live: unpublished -> pending -> approved | rejected
- publication, one independent unpublished <-> published switch per
  environment; the gated one only opens from approved
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from blockhub.catalog.environments import (
    approval_environment,
    get_environment,
    get_environment_label,
)
from blockhub.catalog.regions import region_matches
from blockhub.domain.exceptions import Conflict, InvalidState, ValidationError
from blockhub.domain.lifecycle import block as block_lifecycle
from blockhub.domain.lifecycle.version import (
    APPROVED,
    PENDING,
    PUBLISHED,
    REJECTED,
    UNPUBLISHED,
    assert_environment_transition,
)
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.block import Block
from blockhub.models.block_version import BlockVersion


# ---------------------------------------------------------------------------
# Shared guards
# ---------------------------------------------------------------------------

def require_environment(environment: str):
    env = get_environment(environment) if environment else None
    if env is None:
        raise ValidationError(f"Unknown environment: {environment!r}")
    return env


def _assert_block_active(block: Block) -> None:
    if block.status == block_lifecycle.ARCHIVED:
        raise InvalidState(f"Block {block.name} is archived")


def _assert_pending(request: ApprovalRequest) -> None:
    if request.status != PENDING:
        raise InvalidState(f"Approval request {request.id} is already {request.status}")


def _offline_status(environment: str) -> str:
    """Status an environment falls back to once its version is taken down."""
    return APPROVED if require_environment(environment).requires_approval else UNPUBLISHED


# ---------------------------------------------------------------------------
# Submit for review
# ---------------------------------------------------------------------------

def check_submit(
    version: BlockVersion,
    block: Block,
    pending: Optional[ApprovalRequest],
) -> None:
    _assert_block_active(block)

    if pending is not None:
        raise Conflict(f"Version {version.version} already has a pending approval request")

    gate = approval_environment()
    assert_environment_transition(
        environment=gate,
        gated=True,
        from_status=version.status_for(gate),
        to_status=PENDING,
    )


def apply_submit(
    version: BlockVersion,
    block: Block,
    *,
    actor_id: str,
    now: datetime,
) -> ApprovalRequest:
    version.set_status_for(approval_environment(), PENDING)
    version.approved_by = None
    version.approved_at = None

    block.status = block_lifecycle.release_block_status(block.status, block_lifecycle.PENDING)
    block.updated_at = now

    request = ApprovalRequest()
    request.block_id = block.id
    request.block_name = block.name
    request.version_id = version.id
    request.version = version.version
    request.requested_by = actor_id
    request.requested_at = now
    request.status = PENDING
    return request


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------

def check_approve(request: ApprovalRequest, version: BlockVersion) -> None:
    _assert_pending(request)

    gate = approval_environment()
    assert_environment_transition(
        environment=gate,
        gated=True,
        from_status=version.status_for(gate),
        to_status=APPROVED,
    )


def apply_approve(
    request: ApprovalRequest,
    version: BlockVersion,
    block: Block,
    *,
    actor_id: str,
    comment: Optional[str],
    now: datetime,
) -> None:
    request.status = APPROVED
    request.reviewed_by = actor_id
    request.reviewed_at = now
    request.comment = comment

    version.set_status_for(approval_environment(), APPROVED)
    version.approved_by = actor_id
    version.approved_at = now

    block.status = block_lifecycle.release_block_status(block.status, block_lifecycle.APPROVED)
    block.updated_at = now


def check_reject(request: ApprovalRequest, comment: Optional[str]) -> None:
    if not comment or not comment.strip():
        raise ValidationError("A comment is required to reject an approval request")
    _assert_pending(request)


def apply_reject(
    request: ApprovalRequest,
    version: Optional[BlockVersion],
    *,
    actor_id: str,
    comment: str,
    now: datetime,
) -> None:
    request.status = REJECTED
    request.reviewed_by = actor_id
    request.reviewed_at = now
    request.comment = comment.strip()

    gate = approval_environment()
    if version is not None and version.status_for(gate) == PENDING:
        version.set_status_for(gate, REJECTED)


# ---------------------------------------------------------------------------
# Publish / unpublish
# ---------------------------------------------------------------------------

def check_publish(
    version: BlockVersion,
    block: Block,
    environment: str,
    region: Optional[str] = None,
) -> None:
    env = require_environment(environment)
    _assert_block_active(block)

    if not region_matches(version.region, region):
        raise ValidationError(
            f"Version {version.version} is released for region {version.region}, not {region}"
        )

    if version.is_live_in(environment):
        raise Conflict(
            f"Version {version.version} is already published to {env.label}",
            environment=environment,
        )

    if env.requires_approval and version.status_for(environment) != APPROVED:
        raise InvalidState(
            f"Version {version.version} must be approved before publishing to {env.label}",
            environment=environment,
        )

    assert_environment_transition(
        environment=environment,
        gated=env.requires_approval,
        from_status=version.status_for(environment),
        to_status=PUBLISHED,
    )


def apply_publish(
    version: BlockVersion,
    block: Block,
    environment: str,
    *,
    displaced: Iterable[BlockVersion],
    now: datetime,
) -> None:
    """
    Make ``version`` the live one for its region in ``environment``.

    ``displaced`` are the versions holding that slot right now; they lose
    it in the same unit of work.
    """
    for holder in displaced:
        if holder.id == version.id:
            continue
        holder.set_status_for(environment, _offline_status(environment))
        holder.set_published_at_for(environment, None)

    version.set_status_for(environment, PUBLISHED)
    version.set_published_at_for(environment, now)
    if version.published_at is None:
        version.published_at = now

    block.set_version_for(environment, version.version)
    block.status = block_lifecycle.release_block_status(block.status, block_lifecycle.PUBLISHED)
    block.updated_at = now


def check_unpublish(version: BlockVersion, environment: str) -> None:
    env = require_environment(environment)

    if not version.is_live_in(environment):
        raise Conflict(
            f"Version {version.version} is not published to {env.label}",
            environment=environment,
        )


def apply_unpublish(
    version: BlockVersion,
    block: Block,
    environment: str,
    *,
    successor: Optional[BlockVersion],
    now: datetime,
) -> None:
    """
    Take ``version`` down from ``environment``.

    The block's pointer moves to ``successor`` (another region's live
    version, if any) or is cleared.
    """
    version.set_status_for(environment, _offline_status(environment))
    version.set_published_at_for(environment, None)

    block.set_version_for(environment, successor.version if successor else None)
    block.updated_at = now


def describe(version: BlockVersion) -> str:
    live = ", ".join(get_environment_label(env) for env in version.environments) or "nowhere"
    return f"{version.version} [{version.status}] live in {live}"
