# blockhub/application/blocks/delete_version.py
from typing import Optional
from flask import current_app
from sqlalchemy import select
from blockhub.domain.exceptions import InvalidState
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.media import delete_package
from blockhub.utils.transaction import transactional


def delete_version(
    *,
    version_id: str,
    actor_id: str,
    stores: Optional[Stores] = None,
) -> None:
    """
    Delete a version that never went anywhere.

    Refused once the version has been published or reviewed, since
    approval requests are kept forever and reference it.
    """
    stores = stores or get_stores()

    with transactional(stores.session):
        version = stores.versions.require(version_id)
        block = stores.blocks.require(version.block_id, for_update=True)
        version = stores.versions.require(version_id, for_update=True)

        if version.published_at is not None:
            raise InvalidState(f"Version {version.version} has been published and cannot be deleted")

        has_history = stores.session.execute(
            select(ApprovalRequest.id).where(ApprovalRequest.version_id == version.id).limit(1)
        ).first()
        if has_history:
            raise InvalidState(f"Version {version.version} has approval history and cannot be deleted")

        package_url = version.package_url
        stores.session.delete(version)
        stores.session.flush()

        remaining = stores.versions.list_for_block(block.id)
        block.latest_version = remaining[0].version if remaining else None
        block.updated_at = utcnow()

    delete_package(package_url)
    current_app.logger.info("version.delete version=%s block=%s actor=%s", version_id, block.id, actor_id)
