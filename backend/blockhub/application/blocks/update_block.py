# blockhub/application/blocks/update_block.py
from typing import Any, Dict, Optional
from flask import current_app
from blockhub.domain.exceptions import ValidationError
from blockhub.domain.invariants.block import assert_block
from blockhub.domain.lifecycle.block import BLOCK_TYPES
from blockhub.models.base import utcnow
from blockhub.models.block import Block
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = ("name", "description", "category", "type")


def update_block(
    *,
    block_id: str,
    actor_id: str,
    data: Dict[str, Any],
    stores: Optional[Stores] = None,
    before_update=None,
) -> Block:
    """
    Update descriptive fields on a block.

    Design rules:
    - Only whitelisted fields are mutable; release pointers and status
      belong to the release commands
    - No silent no-op updates
    - Invariants always revalidated

    ``before_update`` receives the locked block first (optimistic lock hook).
    """
    if "type" in data and data["type"] not in BLOCK_TYPES:
        raise ValidationError(f"Unknown block type: {data['type']}")
    if "name" in data and not (data["name"] or "").strip():
        raise ValidationError("Block name cannot be empty")

    stores = stores or get_stores()
    changed_fields: list[str] = []

    with transactional(stores.session):
        block = stores.blocks.require(block_id, for_update=True)

        if before_update is not None:
            before_update(block)

        for field in ALLOWED_UPDATE_FIELDS:
            if field in data and data[field] is not None and getattr(block, field) != data[field]:
                setattr(block, field, data[field])
                changed_fields.append(field)

        if not changed_fields:
            # Explicitly fail instead of silently succeeding
            raise ValidationError("No valid fields provided for update")

        block.updated_at = utcnow()
        assert_block(block)

    current_app.logger.info(
        "block.update block=%s fields=%s actor=%s", block.id, changed_fields, actor_id
    )
    return block
