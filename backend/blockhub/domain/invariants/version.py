from blockhub.catalog.environments import environment_keys, get_environment_label
from blockhub.catalog.regions import is_known_region
from blockhub.domain.lifecycle.version import PRODUCTION_STATUSES, STAGING_STATUSES, PUBLISHED
from blockhub.domain.exceptions import InvariantViolation

VERSION_TYPES = ("package", "config")


def assert_version_environments(version):
    """
    Live membership, status and publication timestamp must agree for
    every environment.
    """
    for env in environment_keys():
        live = version.status_for(env) == PUBLISHED
        stamped = version.published_at_for(env) is not None

        if live != stamped:
            raise InvariantViolation(
                f"Version {version.id}: {env} status is "
                f"{version.status_for(env)} but publishedAt is "
                f"{'set' if stamped else 'empty'}"
            )

    if version.staging_status not in STAGING_STATUSES:
        raise InvariantViolation(f"Unknown staging status: {version.staging_status}")
    if version.production_status not in PRODUCTION_STATUSES:
        raise InvariantViolation(f"Unknown production status: {version.production_status}")


def assert_version_content(version):
    if version.type not in VERSION_TYPES:
        raise InvariantViolation(f"Unknown version type: {version.type}")

    if version.type == "package":
        if not version.package_url or version.package_size is None:
            raise InvariantViolation(
                "package version must have packageUrl and packageSize set."
            )

    if not is_known_region(version.region):
        raise InvariantViolation(f"Unknown region: {version.region}")


def assert_version(version):
    assert_version_content(version)
    assert_version_environments(version)


def assert_exclusive_holder(holders, *, environment):
    """At most one version per region lineage may be live in an environment."""
    seen = set()
    for holder in holders:
        if holder.region in seen:
            label = get_environment_label(environment)
            raise InvariantViolation(
                f"More than one version of block {holder.block_id} is live "
                f"in {label} for region {holder.region}"
            )
        seen.add(holder.region)
