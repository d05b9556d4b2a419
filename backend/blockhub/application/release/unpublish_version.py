# blockhub/application/release/unpublish_version.py
from typing import Optional
from flask import current_app
from blockhub.domain.release import check_unpublish, apply_unpublish, require_environment, describe
from blockhub.domain.invariants.version import assert_version_environments
from blockhub.domain.invariants.block import assert_block_pointers
from blockhub.models.block_version import BlockVersion
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def unpublish_version(
    *,
    version_id: str,
    environment: str,
    actor_id: str,
    stores: Optional[Stores] = None,
) -> BlockVersion:
    """
    Take a version down from one environment.

    Other environments keep serving it. The block's pointer falls back to
    the most recently published version still live there, if any.
    """
    stores = stores or get_stores()
    require_environment(environment)

    with transactional(stores.session):
        version = stores.versions.require(version_id)
        block = stores.blocks.require(version.block_id, for_update=True)
        version = stores.versions.require(version_id, for_update=True)

        check_unpublish(version, environment)

        remaining = stores.versions.live_holders(
            block_id=block.id,
            environment=environment,
            exclude_id=version.id,
        )
        successor = remaining[0] if remaining else None

        apply_unpublish(version, block, environment, successor=successor, now=utcnow())
        stores.session.flush()

        assert_version_environments(version)
        assert_block_pointers(block, stores.versions.list_for_block(block.id))

    current_app.logger.info(
        "version.unpublish version=%s block=%s environment=%s successor=%s actor=%s state=%s",
        version.id, block.id, environment,
        successor.id if successor else None, actor_id, describe(version),
    )
    return version
