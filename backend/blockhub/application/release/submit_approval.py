# blockhub/application/release/submit_approval.py
from typing import Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from blockhub.domain.exceptions import Conflict
from blockhub.domain.release import check_submit, apply_submit
from blockhub.domain.invariants.version import assert_version_environments
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def submit_approval(
    *,
    version_id: str,
    actor_id: str,
    stores: Optional[Stores] = None,
) -> ApprovalRequest:
    """
    Open a review for a block version.

    Responsibilities:
    - lock block then version
    - refuse a second pending request for the same version
    - move the version to pending and create the request
    """
    stores = stores or get_stores()

    try:
        with transactional(stores.session):
            # 1️⃣ Resolve and lock, parent first
            version = stores.versions.require(version_id)
            block = stores.blocks.require(version.block_id, for_update=True)
            version = stores.versions.require(version_id, for_update=True)
            pending = stores.approvals.pending_for_version(version.id, for_update=True)

            # 2️⃣ Validate before touching anything
            check_submit(version, block, pending)

            # 3️⃣ Apply
            request = apply_submit(version, block, actor_id=actor_id, now=utcnow())
            stores.approvals.add(request)

            assert_version_environments(version)

    except IntegrityError as exc:
        # Lost a race against a concurrent submission (unique pending index)
        raise Conflict(f"Version {version_id} already has a pending approval request") from exc

    current_app.logger.info(
        "approval.submit request=%s version=%s block=%s actor=%s",
        request.id, version_id, request.block_id, actor_id,
    )
    return request
