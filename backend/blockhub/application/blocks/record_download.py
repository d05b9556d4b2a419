from typing import Optional
from blockhub.models.block import Block
from blockhub.repositories import Stores, get_stores
from blockhub.utils.transaction import transactional


def record_download(*, block_id: str, stores: Optional[Stores] = None) -> Block:
    # best-effort counter, no lock
    stores = stores or get_stores()

    with transactional(stores.session):
        block = stores.blocks.require(block_id)
        block.download_count = (block.download_count or 0) + 1

    return block
