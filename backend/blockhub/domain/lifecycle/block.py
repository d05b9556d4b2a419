# blockhub/domain/lifecycle/block.py
DRAFT = "draft"
PENDING = "pending"
APPROVED = "approved"
PUBLISHED = "published"
ARCHIVED = "archived"

BLOCK_STATUSES = (DRAFT, PENDING, APPROVED, PUBLISHED, ARCHIVED)
BLOCK_TYPES = ("component", "page", "module")


def release_block_status(current: str, target: str) -> str:
    """
    Status a block takes after a release command on one of its versions.

    The block reports the latest release step, so a live block goes back
    to ``pending`` when a new version is submitted. Archived blocks keep
    their status.
    """
    if current == ARCHIVED:
        return current
    return target
