# blockhub/repositories/versions.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_, select

from blockhub.catalog.regions import ALL_REGIONS
from blockhub.models.block_version import BlockVersion
from .base import BaseRepository


def _status_column(environment: str):
    return getattr(BlockVersion, f"{environment}_status")


def _published_at_column(environment: str):
    return getattr(BlockVersion, f"{environment}_published_at")


class BlockVersionRepository(BaseRepository[BlockVersion]):
    model = BlockVersion
    entity_name = "Version"

    def list_for_block(self, block_id: str, *, region: Optional[str] = None) -> List[BlockVersion]:
        """
        Versions of a block, newest first.

        A concrete ``region`` also matches versions tagged for all regions;
        the sentinel itself (or no region) returns everything.
        """
        stmt = select(BlockVersion).where(BlockVersion.block_id == block_id)
        if region and region != ALL_REGIONS:
            stmt = stmt.where(or_(BlockVersion.region == region, BlockVersion.region == ALL_REGIONS))
        stmt = stmt.order_by(BlockVersion.created_at.desc(), BlockVersion.id.desc())
        return list(self.session.execute(stmt).scalars())

    def find(self, block_id: str, region: str, version: str) -> Optional[BlockVersion]:
        stmt = select(BlockVersion).where(
            BlockVersion.block_id == block_id,
            BlockVersion.region == region,
            BlockVersion.version == version,
        )
        return self.session.execute(stmt).scalars().first()

    def regions_for_block(self, block_id: str) -> List[str]:
        stmt = (
            select(BlockVersion.region)
            .where(BlockVersion.block_id == block_id)
            .distinct()
            .order_by(BlockVersion.region.asc())
        )
        return list(self.session.execute(stmt).scalars())

    def live_holders(
        self,
        *,
        block_id: str,
        environment: str,
        region: Optional[str] = None,
        exclude_id: Optional[str] = None,
        for_update: bool = False,
    ) -> List[BlockVersion]:
        """
        Versions currently published to ``environment`` for a block, most
        recently published first. ``region`` narrows to one lineage.
        """
        stmt = select(BlockVersion).where(
            BlockVersion.block_id == block_id,
            _status_column(environment) == "published",
        )
        if region is not None:
            stmt = stmt.where(BlockVersion.region == region)
        if exclude_id:
            stmt = stmt.where(BlockVersion.id != exclude_id)
        stmt = stmt.order_by(_published_at_column(environment).desc(), BlockVersion.id.desc())
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return list(self.session.execute(stmt).scalars())
