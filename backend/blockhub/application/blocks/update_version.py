# blockhub/application/blocks/update_version.py
from typing import Any, Optional
from flask import current_app
from blockhub.domain.exceptions import InvalidState, ValidationError
from blockhub.domain.invariants.version import assert_version
from blockhub.models.block_version import BlockVersion
from blockhub.repositories import Stores, get_stores
from blockhub.utils.media import save_package, delete_package
from blockhub.utils.transaction import transactional
from .create_version import parse_config


def update_version(
    *,
    version_id: str,
    actor_id: str,
    changelog: Optional[str] = None,
    config: Any = None,
    package=None,
    stores: Optional[Stores] = None,
) -> BlockVersion:
    """
    Edit a version's content while it is still a candidate.

    Content is frozen once the version is live anywhere or under review.
    """
    stores = stores or get_stores()
    payload = parse_config(config) if config is not None else None

    version = stores.versions.require(version_id)
    stores.blocks.require(version.block_id)

    new_url = new_size = None
    if package is not None:
        try:
            new_url, new_size = save_package(package, block_id=version.block_id, version=version.version)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    old_url = version.package_url
    changed_fields: list[str] = []

    try:
        with transactional(stores.session):
            stores.blocks.require(version.block_id, for_update=True)
            version = stores.versions.require(version_id, for_update=True)

            if version.environments:
                raise InvalidState(f"Version {version.version} is live and cannot be edited")
            if stores.approvals.pending_for_version(version.id) is not None:
                raise InvalidState(f"Version {version.version} is under review and cannot be edited")

            if changelog is not None and changelog != version.changelog:
                version.changelog = changelog
                changed_fields.append("changelog")
            if payload is not None and payload != version.config:
                version.config = payload
                changed_fields.append("config")
            if new_url is not None:
                version.package_url = new_url
                version.package_size = new_size
                changed_fields.append("package")

            if not changed_fields:
                raise ValidationError("No valid fields provided for update")

            assert_version(version)
    except Exception:
        delete_package(new_url)
        raise

    # Old binary goes only after the new row is committed
    if new_url is not None:
        delete_package(old_url)

    current_app.logger.info(
        "version.update version=%s fields=%s actor=%s", version.id, changed_fields, actor_id
    )
    return version
