# blockhub/application/release/approve_request.py
from typing import Optional
from flask import current_app
from blockhub.domain.release import check_approve, apply_approve
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def approve_request(
    *,
    request_id: str,
    actor_id: str,
    comment: Optional[str] = None,
    stores: Optional[Stores] = None,
) -> ApprovalRequest:
    """
    Approve a pending request; its version becomes publishable to
    production and the block reports approved.
    """
    stores = stores or get_stores()

    with transactional(stores.session):
        request = stores.approvals.require(request_id)
        block = stores.blocks.require(request.block_id, for_update=True)
        request = stores.approvals.require(request_id, for_update=True)
        version = stores.versions.require(request.version_id, for_update=True)

        check_approve(request, version)

        apply_approve(
            request,
            version,
            block,
            actor_id=actor_id,
            comment=comment,
            now=utcnow(),
        )

    current_app.logger.info(
        "approval.approve request=%s version=%s actor=%s",
        request.id, request.version_id, actor_id,
    )
    return request
