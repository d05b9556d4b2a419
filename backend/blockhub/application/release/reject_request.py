# blockhub/application/release/reject_request.py
from typing import Optional
from flask import current_app
from blockhub.domain.release import check_reject, apply_reject
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def reject_request(
    *,
    request_id: str,
    actor_id: str,
    comment: Optional[str],
    stores: Optional[Stores] = None,
) -> ApprovalRequest:
    """
    Reject a pending request. A comment is mandatory; the block is left
    as it was and the version may be submitted again.
    """
    stores = stores or get_stores()

    with transactional(stores.session):
        request = stores.approvals.require(request_id)
        stores.blocks.require(request.block_id, for_update=True)
        request = stores.approvals.require(request_id, for_update=True)
        version = stores.versions.get_for_update(request.version_id)

        check_reject(request, comment)

        apply_reject(
            request,
            version,
            actor_id=actor_id,
            comment=comment,
            now=utcnow(),
        )

    current_app.logger.info(
        "approval.reject request=%s version=%s actor=%s",
        request.id, request.version_id, actor_id,
    )
    return request
