# blockhub/domain/lifecycle/version.py
from typing import Dict, Set

from blockhub.catalog.environments import get_environment_label
from blockhub.domain.exceptions import InvalidState

UNPUBLISHED = "unpublished"
PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
PUBLISHED = "published"

STAGING_STATUSES = (UNPUBLISHED, PUBLISHED)
PRODUCTION_STATUSES = (UNPUBLISHED, PENDING, APPROVED, PUBLISHED, REJECTED)

# Approval axis, tracked on the gated environment while it is not live.
# pending -> pending is refused earlier as a duplicate submission.
ALLOWED_GATED_TRANSITIONS: Dict[str, Set[str]] = {
    UNPUBLISHED: {PENDING},
    PENDING: {APPROVED, REJECTED},
    REJECTED: {PENDING},
    APPROVED: {PENDING, PUBLISHED},
    PUBLISHED: {APPROVED},  # unpublish only
}

# Environments without an approval gate
ALLOWED_OPEN_TRANSITIONS: Dict[str, Set[str]] = {
    UNPUBLISHED: {PUBLISHED},
    PUBLISHED: {UNPUBLISHED},
}


def assert_environment_transition(
    *,
    environment: str,
    gated: bool,
    from_status: str,
    to_status: str,
) -> None:
    """
    Guards per-environment status changes on a block version.
    Single source of truth for which moves are legal.
    """
    table = ALLOWED_GATED_TRANSITIONS if gated else ALLOWED_OPEN_TRANSITIONS
    allowed = table.get(from_status, set())

    if to_status not in allowed:
        raise InvalidState(
            f"Illegal {get_environment_label(environment)} transition: "
            f"{from_status} → {to_status}",
            environment=environment,
        )
