# blockhub/repositories/base.py
"""Shared store contract: keyed lookup, row locking and inserts."""

from __future__ import annotations

from typing import ClassVar, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from blockhub.domain.exceptions import NotFound

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """Provide keyed access to one model over an explicit session."""

    model: ClassVar[Type]
    entity_name: ClassVar[str] = "Entity"

    def __init__(self, session: Session):
        self.session = session

    def get(self, entity_id: str) -> Optional[ModelT]:
        if not entity_id:
            return None
        return self.session.get(self.model, entity_id)

    def get_for_update(self, entity_id: str) -> Optional[ModelT]:
        """Fetch a row under an exclusive lock held until commit/rollback."""
        if not entity_id:
            return None
        stmt = (
            select(self.model)
            .where(self.model.id == entity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def require(self, entity_id: str, *, for_update: bool = False) -> ModelT:
        """Like get/get_for_update but raises NotFound for a missing id."""
        entity = self.get_for_update(entity_id) if for_update else self.get(entity_id)
        if entity is None:
            raise NotFound(f"{self.entity_name} {entity_id} not found")
        return entity

    def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        self.session.flush()  # ensures defaults (id, timestamps) are populated
        return entity
