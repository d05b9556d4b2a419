# blockhub/application/blocks/queries.py
from typing import Dict, List, Optional
from blockhub.domain.exceptions import ValidationError
from blockhub.domain.lifecycle.block import BLOCK_STATUSES, BLOCK_TYPES
from blockhub.models.block import Block
from blockhub.repositories import Stores, get_stores
from blockhub.utils.pagination import PageResult


def list_blocks(
    *,
    app_id: Optional[str] = None,
    status: Optional[str] = None,
    type: Optional[str] = None,
    category: Optional[str] = None,
    keyword: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    stores: Optional[Stores] = None,
) -> PageResult[Block]:
    if status and status not in BLOCK_STATUSES:
        raise ValidationError(f"Unknown block status: {status}")
    if type and type not in BLOCK_TYPES:
        raise ValidationError(f"Unknown block type: {type}")

    stores = stores or get_stores()
    return stores.blocks.list(
        app_id=app_id,
        status=status,
        type=type,
        category=category,
        keyword=keyword,
        page=page,
        page_size=page_size,
    )


def get_block(*, block_id: str, stores: Optional[Stores] = None) -> Block:
    stores = stores or get_stores()
    return stores.blocks.require(block_id)


def block_stats(*, stores: Optional[Stores] = None) -> Dict[str, int]:
    stores = stores or get_stores()
    return {"total": stores.blocks.count()}


def list_categories(*, stores: Optional[Stores] = None) -> List[str]:
    stores = stores or get_stores()
    return stores.blocks.categories()
