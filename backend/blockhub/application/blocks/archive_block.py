# blockhub/application/blocks/archive_block.py
from typing import Optional
from flask import current_app
from blockhub.catalog.environments import environment_keys, get_environment_label
from blockhub.domain.exceptions import Conflict, InvalidState
from blockhub.domain.lifecycle.block import ARCHIVED
from blockhub.models.base import utcnow
from blockhub.models.block import Block
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def archive_block(
    *,
    block_id: str,
    actor_id: str,
    stores: Optional[Stores] = None,
) -> Block:
    """
    Retire a block. Blocks are never deleted; a live block must be
    unpublished everywhere first.
    """
    stores = stores or get_stores()

    with transactional(stores.session):
        block = stores.blocks.require(block_id, for_update=True)

        if block.status == ARCHIVED:
            raise Conflict(f"Block {block.name} is already archived")

        live = [get_environment_label(env) for env in environment_keys() if block.version_for(env)]
        if live:
            raise InvalidState(
                f"Block {block.name} is still live in {', '.join(live)}; unpublish it first"
            )

        block.status = ARCHIVED
        block.updated_at = utcnow()

    current_app.logger.info("block.archive block=%s actor=%s", block.id, actor_id)
    return block
