# blockhub/application/blocks/create_block.py
from typing import Optional
from flask import current_app
from blockhub.domain.exceptions import ValidationError
from blockhub.domain.invariants.block import assert_block
from blockhub.domain.lifecycle.block import BLOCK_TYPES, DRAFT
from blockhub.models.block import Block
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def create_block(
    *,
    actor_id: str,
    app_id: str,
    name: str,
    type: str,
    description: str = "",
    category: str = "",
    stores: Optional[Stores] = None,
) -> Block:
    """
    Create a new block in DRAFT state under an existing app.

    Edge cases handled:
    - Missing name
    - Unknown block type
    - Unknown app
    """
    if not name or not name.strip():
        raise ValidationError("Block name is required")
    if type not in BLOCK_TYPES:
        raise ValidationError(f"Unknown block type: {type}")

    stores = stores or get_stores()

    with transactional(stores.session):
        app = stores.apps.require(app_id)

        block = Block()
        block.app_id = app.id
        block.name = name.strip()
        block.description = description or ""
        block.type = type
        block.category = category or ""
        block.status = DRAFT
        block.download_count = 0
        block.created_by = actor_id

        stores.blocks.add(block)

        # 🔒 Domain invariants (single source of truth)
        assert_block(block)

    current_app.logger.info("block.create block=%s app=%s actor=%s", block.id, app_id, actor_id)
    return block
