# blockhub/repositories/__init__.py
"""Store contracts bundled over one session."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from blockhub.extensions import db

from .approvals import ApprovalRequestRepository
from .apps import AppMemberRepository, AppRepository
from .blocks import BlockRepository
from .versions import BlockVersionRepository


@dataclass
class Stores:
    session: Session
    apps: AppRepository
    members: AppMemberRepository
    blocks: BlockRepository
    versions: BlockVersionRepository
    approvals: ApprovalRequestRepository

    @classmethod
    def for_session(cls, session: Session) -> "Stores":
        return cls(
            session=session,
            apps=AppRepository(session),
            members=AppMemberRepository(session),
            blocks=BlockRepository(session),
            versions=BlockVersionRepository(session),
            approvals=ApprovalRequestRepository(session),
        )


def get_stores(session: Session | None = None) -> Stores:
    """Stores bound to ``session``, or to the app's scoped session."""
    if session is None:
        session = db.session
    return Stores.for_session(session)


__all__ = [
    "Stores",
    "get_stores",
    "AppRepository",
    "AppMemberRepository",
    "BlockRepository",
    "BlockVersionRepository",
    "ApprovalRequestRepository",
]
