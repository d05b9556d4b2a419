from .submit_approval import submit_approval
from .approve_request import approve_request
from .reject_request import reject_request
from .publish_version import publish_version
from .unpublish_version import unpublish_version
from .queries import (
    list_approval_requests,
    get_approval_for_version,
    list_block_versions,
    get_block_version,
    list_block_regions,
)

__all__ = [
    "submit_approval",
    "approve_request",
    "reject_request",
    "publish_version",
    "unpublish_version",
    "list_approval_requests",
    "get_approval_for_version",
    "list_block_versions",
    "get_block_version",
    "list_block_regions",
]
