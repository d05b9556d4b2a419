from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from .common import PageParams, RequestSchema

BlockType = Literal["component", "page", "module"]


class CreateBlockRequest(RequestSchema):
    name: str = Field(min_length=1, max_length=200)
    app_id: str = Field(min_length=1)
    type: BlockType
    description: str = ""
    category: str = ""


class UpdateBlockRequest(RequestSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[BlockType] = None


class ListBlocksQuery(PageParams):
    app_id: Optional[str] = None
    status: Optional[Literal["draft", "pending", "approved", "published", "archived"]] = None
    type: Optional[BlockType] = None
    category: Optional[str] = None
    keyword: Optional[str] = None


class CreateVersionForm(RequestSchema):
    block_id: str = Field(min_length=1)
    version: str = Field(min_length=1, max_length=50)
    type: Literal["package", "config"] = "package"
    region: Optional[str] = None
    changelog: str = ""
    config: Any = None


class UpdateVersionForm(RequestSchema):
    changelog: Optional[str] = None
    config: Any = None
