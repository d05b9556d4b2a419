# blockhub/catalog/environments.py
from dataclasses import dataclass
from typing import Dict, List, Optional

STAGING = "staging"
PRODUCTION = "production"


@dataclass(frozen=True)
class EnvironmentConfig:
    key: str
    label: str
    description: str
    color: str
    order: int  # release order, lower ships first
    requires_approval: bool = False


ENVIRONMENTS: tuple[EnvironmentConfig, ...] = (
    EnvironmentConfig(
        key=STAGING,
        label="Staging",
        description="Pre-release environment for final verification",
        color="default",
        order=1,
    ),
    EnvironmentConfig(
        key=PRODUCTION,
        label="Production",
        description="Live environment serving end users",
        color="success",
        order=2,
        requires_approval=True,
    ),
)

ENVIRONMENT_MAP: Dict[str, EnvironmentConfig] = {env.key: env for env in ENVIRONMENTS}


def get_environment(key: str) -> Optional[EnvironmentConfig]:
    """Return the environment for ``key`` or None when it is unknown."""
    return ENVIRONMENT_MAP.get(key)


def get_environment_label(key: str) -> str:
    env = get_environment(key)
    return env.label if env else key


def get_environment_color(key: str) -> str:
    env = get_environment(key)
    return env.color if env else "default"


def environments_sorted() -> List[EnvironmentConfig]:
    return sorted(ENVIRONMENTS, key=lambda env: env.order)


def environment_keys() -> List[str]:
    return [env.key for env in environments_sorted()]


def approval_environment() -> str:
    """The environment whose publication is gated by review."""
    return next(env.key for env in environments_sorted() if env.requires_approval)
