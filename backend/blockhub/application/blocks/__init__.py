from .create_block import create_block
from .update_block import update_block
from .archive_block import archive_block
from .record_download import record_download
from .create_version import create_version
from .update_version import update_version
from .delete_version import delete_version
from .queries import list_blocks, get_block, block_stats, list_categories

__all__ = [
    "create_block",
    "update_block",
    "archive_block",
    "record_download",
    "create_version",
    "update_version",
    "delete_version",
    "list_blocks",
    "get_block",
    "block_stats",
    "list_categories",
]
