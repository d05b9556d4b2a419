# blockhub/repositories/blocks.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, select

from blockhub.models.block import Block
from blockhub.utils.pagination import PageResult, paginate
from .base import BaseRepository


class BlockRepository(BaseRepository[Block]):
    model = Block
    entity_name = "Block"

    def list(
        self,
        *,
        app_id: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        category: Optional[str] = None,
        keyword: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> PageResult[Block]:
        """Filter blocks, newest first. ``keyword`` is a case-insensitive name match."""
        stmt = select(Block)
        if app_id:
            stmt = stmt.where(Block.app_id == app_id)
        if status:
            stmt = stmt.where(Block.status == status)
        if type:
            stmt = stmt.where(Block.type == type)
        if category:
            stmt = stmt.where(Block.category == category)
        if keyword:
            stmt = stmt.where(func.lower(Block.name).contains(keyword.lower(), autoescape=True))

        stmt = stmt.order_by(Block.created_at.desc(), Block.id.desc())
        return paginate(self.session, stmt, page=page, page_size=page_size)

    def count(self) -> int:
        return self.session.execute(select(func.count(Block.id))).scalar_one()

    def categories(self) -> List[str]:
        stmt = (
            select(Block.category)
            .where(Block.category != "")
            .distinct()
            .order_by(Block.category.asc())
        )
        return list(self.session.execute(stmt).scalars())
