"""
Contrato de acceso a registros (list / filter / get / create / update / bulk_create)
sobre una Session de SQLAlchemy. Los servicios de dominio solo hablan con este store.
"""
import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy import select, asc, desc
from sqlalchemy.exc import IntegrityError, DBAPIError
from sqlalchemy.orm import Session

log = logging.getLogger("store")

class StoreError(Exception): ...
class DuplicateRecord(StoreError): ...
class StoreUnavailable(StoreError): ...
class RecordNotFound(StoreError): ...

def _order_clause(model, field: str):
    # "-created_date" -> DESC, "sort_order" -> ASC
    if field.startswith("-"):
        return desc(getattr(model, field[1:]))
    return asc(getattr(model, field))

class RecordStore:
    def __init__(self, db: Session):
        self.db = db

    # --------------------------
    # Lectura
    # --------------------------

    def list(self, model, order_by: Optional[str] = None, limit: Optional[int] = None) -> List[Any]:
        return self.filter(model, {}, order_by=order_by, limit=limit)

    def filter(self, model, criteria: dict, order_by: Optional[str] = None,
               limit: Optional[int] = None) -> List[Any]:
        q = select(model).filter_by(**criteria)
        if order_by:
            q = q.order_by(_order_clause(model, order_by), asc(model.id))
        else:
            q = q.order_by(asc(model.id))
        if limit is not None:
            q = q.limit(limit)
        return list(self._run(lambda: self.db.execute(q).scalars().all()))

    def get(self, model, record_id: int):
        row = self._run(lambda: self.db.get(model, record_id))
        if row is None:
            raise RecordNotFound(f"{model.__name__} {record_id}")
        return row

    # --------------------------
    # Escritura (cada llamada es su propia transacción)
    # --------------------------

    def create(self, model, values: dict):
        row = model(**values)
        self.db.add(row)
        self._commit()
        self._run(lambda: self.db.refresh(row))
        return row

    def update(self, model, record_id: int, patch: dict):
        row = self.get(model, record_id)
        for k, v in patch.items():
            setattr(row, k, v)
        self._commit()
        self._run(lambda: self.db.refresh(row))
        return row

    def bulk_create(self, model, records: Iterable[dict]) -> List[Any]:
        rows = [model(**values) for values in records]
        self.db.add_all(rows)
        self._commit()
        for row in rows:
            self._run(lambda: self.db.refresh(row))
        return rows

    # --------------------------
    # Helpers
    # --------------------------

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecord(str(e.orig)) from e
        except DBAPIError as e:
            self.db.rollback()
            log.error("store write failed: %s", e)
            raise StoreUnavailable(str(e.orig)) from e

    def _run(self, fn):
        try:
            return fn()
        except DBAPIError as e:
            self.db.rollback()
            log.error("store read failed: %s", e)
            raise StoreUnavailable(str(e.orig)) from e
