# blockhub/application/release/queries.py
from typing import List, Optional
from blockhub.catalog.regions import is_known_region
from blockhub.domain.exceptions import NotFound, ValidationError
from blockhub.models.approval_request import ApprovalRequest
from blockhub.models.block_version import BlockVersion
from blockhub.repositories import Stores, get_stores
from blockhub.utils.pagination import PageResult

APPROVAL_STATUSES = {"pending", "approved", "rejected"}


def list_approval_requests(
    *,
    status: Optional[str] = None,
    block_id: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    stores: Optional[Stores] = None,
) -> PageResult[ApprovalRequest]:
    """Approval requests, most recently requested first."""
    if status and status not in APPROVAL_STATUSES:
        raise ValidationError(f"Unknown approval status: {status}")

    stores = stores or get_stores()
    return stores.approvals.list(status=status, block_id=block_id, page=page, page_size=page_size)


def get_approval_for_version(*, version_id: str, stores: Optional[Stores] = None) -> ApprovalRequest:
    stores = stores or get_stores()
    stores.versions.require(version_id)

    request = stores.approvals.latest_for_version(version_id)
    if request is None:
        raise NotFound(f"No approval request for version {version_id}")
    return request


def list_block_versions(
    *,
    block_id: str,
    region: Optional[str] = None,
    stores: Optional[Stores] = None,
) -> List[BlockVersion]:
    """Versions of a block, newest first, optionally narrowed to a region."""
    if region and not is_known_region(region):
        raise ValidationError(f"Unknown region: {region}")

    stores = stores or get_stores()
    stores.blocks.require(block_id)
    return stores.versions.list_for_block(block_id, region=region)


def get_block_version(*, version_id: str, stores: Optional[Stores] = None) -> BlockVersion:
    stores = stores or get_stores()
    return stores.versions.require(version_id)


def list_block_regions(*, block_id: str, stores: Optional[Stores] = None) -> List[str]:
    stores = stores or get_stores()
    stores.blocks.require(block_id)
    return stores.versions.regions_for_block(block_id)
