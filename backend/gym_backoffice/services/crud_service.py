"""
Shared create/read/update/delete use-cases for the back office tables.

Controllers hand these services already validated, snake_case attribute
dicts (see ``core.validation``). The service checks that referenced rows
exist, applies partial updates on top of the stored entity and refuses to
delete rows that other rows still point at.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Generic, List, Tuple, TypeVar

from gym_backoffice.core.exceptions import NotFoundError, RelatedRecordsError
from gym_backoffice.core.validation import ValidationError
from gym_backoffice.domain.interfaces import ICrudRepository

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


class CrudService(Generic[EntityT]):
    entity_name: str = ""
    entity_cls: Any = None

    def __init__(self, repo: ICrudRepository[EntityT]) -> None:
        self.repo = repo

    def _references(self) -> Dict[str, Tuple[str, ICrudRepository]]:
        """Foreign key attribute -> (entity label, repository to check)."""
        return {}

    def _check_references(self, data: Dict[str, Any]) -> None:
        for attr, (label, repo) in self._references().items():
            ref_id = data.get(attr)
            if ref_id is not None and not repo.exists(ref_id):
                raise NotFoundError(label, ref_id)

    def _check_consistency(self, entity: EntityT) -> None:
        """Hook for rules spanning several fields of the merged entity."""

    def _build(self, base: Any, data: Dict[str, Any]) -> EntityT:
        try:
            if base is None:
                return self.entity_cls(**data)
            return replace(base, **data)
        except ValueError as e:
            raise ValidationError([{"field": "", "message": str(e)}])

    def list_all(self) -> List[EntityT]:
        return self.repo.list_all()

    def get(self, entity_id: int) -> EntityT:
        entity = self.repo.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def create(self, data: Dict[str, Any]) -> EntityT:
        self._check_references(data)
        entity = self._build(None, data)
        self._check_consistency(entity)
        created = self.repo.create(entity)
        logger.info(
            f"{self.entity_name} created",
            extra={"context": {"id": getattr(created, "id", None)}},
        )
        return created

    def update(self, entity_id: int, changes: Dict[str, Any]) -> EntityT:
        existing = self.get(entity_id)
        self._check_references(changes)
        merged = self._build(existing, changes)
        self._check_consistency(merged)
        updated = self.repo.update(merged)
        logger.info(
            f"{self.entity_name} updated",
            extra={"context": {"id": entity_id, "fields": sorted(changes)}},
        )
        return updated

    def delete(self, entity_id: int) -> None:
        if not self.repo.exists(entity_id):
            raise NotFoundError(self.entity_name, entity_id)

        related = self.repo.count_related(entity_id)
        if related:
            logger.info(
                f"{self.entity_name} delete refused",
                extra={"context": {"id": entity_id, "related": related}},
            )
            raise RelatedRecordsError(self.entity_name, " and ".join(related))

        self.repo.delete(entity_id)
        logger.info(f"{self.entity_name} deleted", extra={"context": {"id": entity_id}})
