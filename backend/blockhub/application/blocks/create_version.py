# blockhub/application/blocks/create_version.py
import json
from typing import Any, Optional
from flask import current_app
from sqlalchemy.exc import IntegrityError
from blockhub.catalog.regions import DEFAULT_REGION, is_known_region
from blockhub.domain.exceptions import Conflict, InvalidState, ValidationError
from blockhub.domain.invariants.version import VERSION_TYPES, assert_version
from blockhub.domain.lifecycle.block import ARCHIVED
from blockhub.domain.lifecycle.version import UNPUBLISHED
from blockhub.models.base import utcnow
from blockhub.models.block_version import BlockVersion
from blockhub.repositories import Stores, get_stores
from blockhub.utils.media import save_package, delete_package
from blockhub.utils.transaction import transactional


def parse_config(raw: Any) -> Any:
    """
    Accept the config payload as a JSON string or an already-decoded
    object. Empty means ``{}``.
    """
    if raw is None or raw == "":
        return {}
    if isinstance(raw, (dict, list)):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("config must be valid JSON") from exc


def create_version(
    *,
    actor_id: str,
    block_id: str,
    version: str,
    type: str = "package",
    region: Optional[str] = None,
    changelog: str = "",
    config: Any = None,
    package=None,
    package_url: Optional[str] = None,
    package_size: Optional[int] = None,
    stores: Optional[Stores] = None,
) -> BlockVersion:
    """
    Create a release candidate for a block, unpublished everywhere.

    ``package`` is an uploaded file; callers that already stored the
    binary elsewhere pass ``package_url``/``package_size`` instead.

    Edge cases handled:
    - package versions without a package
    - duplicate version string within a block's region
    - unknown region
    - archived block
    """
    version = (version or "").strip()
    region = region or DEFAULT_REGION

    if not version:
        raise ValidationError("version is required")
    if type not in VERSION_TYPES:
        raise ValidationError(f"Unknown version type: {type}")
    if not is_known_region(region):
        raise ValidationError(f"Unknown region: {region}")
    if type == "package" and package is None and not package_url:
        raise ValidationError("A package file is required for package versions")

    payload = parse_config(config)
    stores = stores or get_stores()

    block = stores.blocks.require(block_id)
    if block.status == ARCHIVED:
        raise InvalidState(f"Block {block.name} is archived")
    if stores.versions.find(block_id, region, version) is not None:
        raise Conflict(f"Version {version} already exists for region {region}")

    stored_url = None
    if package is not None:
        try:
            package_url, package_size = save_package(package, block_id=block_id, version=version)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        stored_url = package_url

    try:
        with transactional(stores.session):
            block = stores.blocks.require(block_id, for_update=True)

            bv = BlockVersion()
            bv.block_id = block.id
            bv.version = version
            bv.type = type
            bv.region = region
            bv.changelog = changelog or ""
            bv.config = payload
            bv.package_url = package_url
            bv.package_size = package_size
            bv.created_by = actor_id
            bv.staging_status = UNPUBLISHED
            bv.production_status = UNPUBLISHED

            stores.versions.add(bv)
            assert_version(bv)

            block.latest_version = version
            block.updated_at = utcnow()

    except IntegrityError as exc:
        delete_package(stored_url)
        raise Conflict(f"Version {version} already exists for region {region}") from exc
    except Exception:
        # Nothing references the upload once the insert is gone
        delete_package(stored_url)
        raise

    current_app.logger.info(
        "version.create version=%s block=%s region=%s actor=%s", bv.id, block_id, region, actor_id
    )
    return bv
