from __future__ import annotations

from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, Field

from blockhub.catalog.environments import get_environment
from blockhub.catalog.regions import is_known_region
from .common import PageParams, RequestSchema


def _known_environment(value: str) -> str:
    if get_environment(value) is None:
        raise ValueError(f"unknown environment {value!r}")
    return value


def _known_region(value: Optional[str]) -> Optional[str]:
    if value and not is_known_region(value):
        raise ValueError(f"unknown region {value!r}")
    return value or None


EnvironmentKey = Annotated[str, AfterValidator(_known_environment)]
RegionKey = Annotated[Optional[str], AfterValidator(_known_region)]


class SubmitApprovalRequest(RequestSchema):
    version_id: str = Field(min_length=1)


class ApproveRequest(RequestSchema):
    comment: Optional[str] = None


class RejectRequest(RequestSchema):
    comment: str = Field(min_length=1)


class PublishVersionRequest(RequestSchema):
    environment: EnvironmentKey
    region: RegionKey = None


class UnpublishVersionRequest(RequestSchema):
    environment: EnvironmentKey


class ListApprovalRequestsQuery(PageParams):
    status: Optional[Literal["pending", "approved", "rejected"]] = None
    block_id: Optional[str] = None


class ListBlockVersionsQuery(RequestSchema):
    region: RegionKey = None
