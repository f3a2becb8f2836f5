"""Repository classes encapsulating database operations.

A single generic repository serves every resource; the descriptor it is
built with says which table to hit and which relations may be
eager-loaded. Repositories return SQLModel objects, perform
commits/refreshes, and roll the session back before re-raising any
store error.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, SQLModel, select

from .resources import ResourceDescriptor
from .schemas import ListQuery

# sqlite3 raises a bare OverflowError when binding an integer wider than 64 bits
STORE_ERRORS = (SQLAlchemyError, OverflowError)


class ResourceRepository:
    """CRUD plus paginated listing for one resource type."""
    def __init__(self, session: Session, descriptor: ResourceDescriptor):
        self.session = session
        self.descriptor = descriptor
        self.model = descriptor.model

    def _with_relation(self, stmt, populate: Optional[str]):
        rel = self.descriptor.relation(populate)
        if rel is None:
            return stmt
        # select-in loading keeps LIMIT/OFFSET on the base rows
        return stmt.options(selectinload(getattr(self.model, rel.attribute)))

    def _commit(self, obj: Optional[SQLModel] = None):
        try:
            self.session.commit()
        except STORE_ERRORS:
            self.session.rollback()
            raise
        if obj is not None:
            self.session.refresh(obj)

    def create(self, values: dict) -> SQLModel:
        """Insert a new row built from `values` and return the managed instance."""
        obj = self.model(**values)
        self.session.add(obj)
        self._commit(obj)
        return obj

    def get(self, record_id: int, populate: Optional[str] = None) -> Optional[SQLModel]:
        """Return the row with primary key `record_id` or `None` if absent."""
        if self.descriptor.relation(populate) is None:
            return self.session.get(self.model, record_id)
        stmt = self._with_relation(select(self.model).where(self.model.id == record_id), populate)
        return self.session.exec(stmt).first()

    def find_page(self, query: ListQuery) -> Tuple[int, List[SQLModel]]:
        """Return `(total, rows)` for one page ordered by creation time.

        `id` breaks ties between rows created in the same instant so the
        ordering, and therefore the page boundaries, are deterministic.
        """
        if query.sort_direction == 'ASC':
            order = (self.model.created_at.asc(), self.model.id.asc())
        else:
            order = (self.model.created_at.desc(), self.model.id.desc())
        stmt = select(self.model).order_by(*order).offset(query.offset).limit(query.limit)
        stmt = self._with_relation(stmt, query.populate)
        rows = self.session.exec(stmt).all()
        total = self.session.exec(select(func.count()).select_from(self.model)).one()
        return total, list(rows)

    def update(self, obj: SQLModel, values: dict) -> SQLModel:
        """Apply only the supplied attributes to `obj` and persist it."""
        for attr, value in values.items():
            setattr(obj, attr, value)
        obj.updated_at = datetime.now(timezone.utc)
        self.session.add(obj)
        self._commit(obj)
        return obj

    def delete(self, obj: SQLModel) -> None:
        """Remove `obj` from the store."""
        self.session.delete(obj)
        self._commit()
