# blockhub/repositories/approvals.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from blockhub.models.approval_request import ApprovalRequest
from blockhub.utils.pagination import PageResult, paginate
from .base import BaseRepository


class ApprovalRequestRepository(BaseRepository[ApprovalRequest]):
    model = ApprovalRequest
    entity_name = "Approval request"

    def list(
        self,
        *,
        status: Optional[str] = None,
        block_id: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> PageResult[ApprovalRequest]:
        """Most recent request first, whatever the insertion order was."""
        stmt = select(ApprovalRequest)
        if status:
            stmt = stmt.where(ApprovalRequest.status == status)
        if block_id:
            stmt = stmt.where(ApprovalRequest.block_id == block_id)
        stmt = stmt.order_by(ApprovalRequest.requested_at.desc(), ApprovalRequest.id.desc())
        return paginate(self.session, stmt, page=page, page_size=page_size)

    def pending_for_version(self, version_id: str, *, for_update: bool = False) -> Optional[ApprovalRequest]:
        stmt = select(ApprovalRequest).where(
            ApprovalRequest.version_id == version_id,
            ApprovalRequest.status == "pending",
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def latest_for_version(self, version_id: str) -> Optional[ApprovalRequest]:
        stmt = (
            select(ApprovalRequest)
            .where(ApprovalRequest.version_id == version_id)
            .order_by(ApprovalRequest.requested_at.desc(), ApprovalRequest.id.desc())
        )
        return self.session.execute(stmt).scalars().first()
