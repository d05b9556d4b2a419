from blockhub.catalog.environments import environment_keys
from blockhub.domain.lifecycle.block import BLOCK_STATUSES, BLOCK_TYPES
from blockhub.domain.exceptions import InvariantViolation


def assert_block(block):
    if block.type not in BLOCK_TYPES:
        raise InvariantViolation(f"Unknown block type: {block.type}")
    if block.status not in BLOCK_STATUSES:
        raise InvariantViolation(f"Unknown block status: {block.status}")
    if block.download_count < 0:
        raise InvariantViolation("downloadCount cannot be negative.")


def assert_block_pointers(block, versions):
    """
    Every environment pointer must name a version of this block that is
    live in that environment.
    """
    for env in environment_keys():
        pointer = block.version_for(env)
        if pointer is None:
            continue

        live = [
            v for v in versions
            if v.block_id == block.id and v.version == pointer and v.is_live_in(env)
        ]
        if not live:
            raise InvariantViolation(
                f"Block {block.id} points {env} at {pointer}, "
                f"which is not published there."
            )
