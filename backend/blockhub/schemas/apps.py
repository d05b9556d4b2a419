from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .common import PageParams, RequestSchema

MemberRole = Literal["owner", "admin", "member"]


class CreateAppRequest(RequestSchema):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    platform: Optional[str] = None
    icon: Optional[str] = None


class ListAppsQuery(PageParams):
    keyword: Optional[str] = None


class AddMemberRequest(RequestSchema):
    user_email: str = Field(min_length=3)
    role: MemberRole = "member"
    regions: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None


class UpdateMemberRequest(RequestSchema):
    role: Optional[MemberRole] = None
    regions: Optional[List[str]] = None
