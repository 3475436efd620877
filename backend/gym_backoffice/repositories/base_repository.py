"""Shared SQLAlchemy CRUD plumbing for the plain back office tables.

Subclasses name their ORM model and column list and implement
``_to_domain``; list and detail queries can ask for eager loads through
``_list_options`` / ``_detail_options``.
"""

from typing import Any, Dict, List

from sqlalchemy import func

from gym_backoffice.db.session import SessionLocal

from .mappers import write_columns


class SqlAlchemyCrudRepository:
    model: Any = None
    columns: tuple = ()

    def __init__(self, db_session=None):
        self.db = db_session or SessionLocal()

    def _list_options(self) -> list:
        return []

    def _detail_options(self) -> list:
        return []

    def _to_domain(self, db_row, detail: bool = False):
        raise NotImplementedError

    def _ordered(self, query):
        # Newest first; id breaks ties between rows created in the same instant
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    def _get_row(self, entity_id: int):
        return self.db.query(self.model).filter_by(id=entity_id).first()

    def get_by_id(self, entity_id: int):
        db_row = (
            self.db.query(self.model)
            .options(*self._detail_options())
            .filter_by(id=entity_id)
            .first()
        )
        return self._to_domain(db_row, detail=True) if db_row else None

    def list_all(self) -> List[Any]:
        query = self.db.query(self.model).options(*self._list_options())
        return [self._to_domain(row) for row in self._ordered(query).all()]

    def list_recent(self, limit: int) -> List[Any]:
        query = self.db.query(self.model).options(*self._list_options())
        return [self._to_domain(row) for row in self._ordered(query).limit(limit).all()]

    def exists(self, entity_id: int) -> bool:
        return self._get_row(entity_id) is not None

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar() or 0

    def create(self, entity):
        db_row = self.model(**write_columns(entity, self.columns))
        self.db.add(db_row)
        self.db.commit()
        self.db.refresh(db_row)
        return self._to_domain(db_row, detail=True)

    def update(self, entity):
        if not getattr(entity, "id", None):
            raise ValueError(f"{self.model.__name__} ID is required for update")

        db_row = self._get_row(entity.id)
        if not db_row:
            raise ValueError(f"{self.model.__name__} with ID {entity.id} not found")

        for name, value in write_columns(entity, self.columns).items():
            setattr(db_row, name, value)
        self.db.commit()
        self.db.refresh(db_row)
        return self._to_domain(db_row, detail=True)

    def delete(self, entity_id: int) -> bool:
        db_row = self._get_row(entity_id)
        if not db_row:
            return False
        self.db.delete(db_row)
        self.db.commit()
        return True

    def count_related(self, entity_id: int) -> Dict[str, int]:
        return {}

    def _count_where(self, model, **filters) -> int:
        return (
            self.db.query(func.count(model.id)).filter_by(**filters).scalar() or 0
        )

    @staticmethod
    def _nonzero(counts: Dict[str, int]) -> Dict[str, int]:
        return {name: value for name, value in counts.items() if value}

