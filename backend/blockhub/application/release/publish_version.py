# blockhub/application/release/publish_version.py
from typing import Optional
from flask import current_app
from blockhub.domain.release import check_publish, apply_publish, require_environment, describe
from blockhub.domain.invariants.version import assert_version_environments, assert_exclusive_holder
from blockhub.domain.invariants.block import assert_block_pointers
from blockhub.models.block_version import BlockVersion
from blockhub.models.base import utcnow
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def publish_version(
    *,
    version_id: str,
    environment: str,
    actor_id: str,
    region: Optional[str] = None,
    stores: Optional[Stores] = None,
) -> BlockVersion:
    """
    Make a version the live one for its region in an environment.

    Responsibilities:
    - transactional boundary covering version, displaced holder and block
    - approval gate for production
    - double publish is a Conflict, never a silent no-op
    """
    stores = stores or get_stores()
    require_environment(environment)

    with transactional(stores.session):
        # 1️⃣ Lock block, then version
        version = stores.versions.require(version_id)
        block = stores.blocks.require(version.block_id, for_update=True)
        version = stores.versions.require(version_id, for_update=True)

        # 2️⃣ Preconditions
        check_publish(version, block, environment, region)

        # 3️⃣ Whoever holds this region's slot hands it over
        displaced = stores.versions.live_holders(
            block_id=block.id,
            environment=environment,
            region=version.region,
            exclude_id=version.id,
            for_update=True,
        )

        apply_publish(version, block, environment, displaced=displaced, now=utcnow())
        stores.session.flush()

        # 4️⃣ Post-conditions; a failure here rolls the whole publish back
        for touched in (version, *displaced):
            assert_version_environments(touched)
        assert_exclusive_holder(
            stores.versions.live_holders(block_id=block.id, environment=environment),
            environment=environment,
        )
        assert_block_pointers(block, stores.versions.list_for_block(block.id))

    current_app.logger.info(
        "version.publish version=%s block=%s environment=%s region=%s displaced=%s actor=%s state=%s",
        version.id, block.id, environment, version.region,
        [v.id for v in displaced], actor_id, describe(version),
    )
    return version
