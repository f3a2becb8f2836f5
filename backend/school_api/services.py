"""Resource handlers used by HTTP controllers.

`ResourceService` implements create/list/get/update/delete once for
every resource type. Each call issues its store operation(s) through the
repository and maps the outcome to a response envelope:

- a missing record is a 404 `{"message": "Not found"}`;
- any error raised by the store is a 500 `{"error": <message>}` with the
  driver's message passed through unchanged.
"""

import logging
from typing import Optional

from fastapi.responses import JSONResponse
from sqlmodel import Session

from . import envelopes
from .config import settings
from .repositories import STORE_ERRORS, ResourceRepository
from .resources import ResourceDescriptor
from .utils.query_params import normalize_list_query, resolve_populate

logger = logging.getLogger("school_api.services")


def store_error_message(exc: Exception) -> str:
    """Return the underlying DB-API message for `exc` when there is one."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def parse_record_id(raw) -> Optional[int]:
    """Return `raw` as an int primary key, or None if it cannot be one."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    # out of SQLite INTEGER range, so no row can have it
    if not -2 ** 63 <= value < 2 ** 63:
        return None
    return value


class ResourceService:
    """Generic CRUD handlers for one resource."""
    def __init__(self, session: Session, descriptor: ResourceDescriptor):
        self.session = session
        self.descriptor = descriptor
        self.repo = ResourceRepository(session, descriptor)

    def _store_failure(self, action: str, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed", action, self.descriptor.noun)
        return envelopes.error_response(store_error_message(exc))

    def create(self, payload: Optional[dict]) -> JSONResponse:
        """Insert a record from `payload`; 201 with the record on success."""
        values = self.descriptor.writable_values(payload or {})
        try:
            obj = self.repo.create(values)
            return envelopes.record_response(self.descriptor, obj, status_code=201)
        except STORE_ERRORS as exc:
            return self._store_failure("create", exc)

    def list(self, page=None, limit=None, sort=None, populate=None) -> JSONResponse:
        """Return one page of records plus pagination metadata."""
        query = normalize_list_query(
            page=page,
            limit=limit,
            sort=sort,
            populate=populate,
            allowed=self.descriptor.relations,
            max_limit=settings.MAX_PAGE_LIMIT,
        )
        try:
            total, rows = self.repo.find_page(query)
            return envelopes.page_response(self.descriptor, total, rows, query)
        except STORE_ERRORS as exc:
            return self._store_failure("list", exc)

    def get(self, raw_id, populate=None) -> JSONResponse:
        """Return a single record, optionally with one relation attached."""
        record_id = parse_record_id(raw_id)
        if record_id is None:
            return envelopes.not_found_response()
        populate = resolve_populate(populate, self.descriptor.relations)
        try:
            obj = self.repo.get(record_id, populate)
            if obj is None:
                return envelopes.not_found_response()
            return envelopes.record_response(self.descriptor, obj, relation=self.descriptor.relation(populate))
        except STORE_ERRORS as exc:
            return self._store_failure("get", exc)

    def update(self, raw_id, payload: Optional[dict]) -> JSONResponse:
        """Partially update a record; fields absent from `payload` are kept."""
        record_id = parse_record_id(raw_id)
        if record_id is None:
            return envelopes.not_found_response()
        try:
            obj = self.repo.get(record_id)
            if obj is None:
                return envelopes.not_found_response()
            obj = self.repo.update(obj, self.descriptor.writable_values(payload or {}))
            return envelopes.record_response(self.descriptor, obj)
        except STORE_ERRORS as exc:
            return self._store_failure("update", exc)

    def delete(self, raw_id) -> JSONResponse:
        """Remove a record; 200 `{"message": "Deleted"}` on success."""
        record_id = parse_record_id(raw_id)
        if record_id is None:
            return envelopes.not_found_response()
        try:
            obj = self.repo.get(record_id)
            if obj is None:
                return envelopes.not_found_response()
            self.repo.delete(obj)
            return envelopes.deleted_response()
        except STORE_ERRORS as exc:
            return self._store_failure("delete", exc)
