"""Response envelope builders.

Every handler outcome maps to one of a handful of JSON shapes:
a single record, a paginated list, a fixed message, or a store error.
"""

import math
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from .resources import BY_MODEL, Relation, ResourceDescriptor
from .schemas import ListQuery

NOT_FOUND = 'Not found'
DELETED = 'Deleted'


def serialize_record(descriptor: ResourceDescriptor, obj: SQLModel, relation: Optional[Relation] = None) -> Dict[str, Any]:
    """Return the wire representation of `obj`.

    The related records under `relation` (if given) are embedded under the
    relation's key without any relations of their own.
    """
    out = {'id': obj.id}
    for key, attr in descriptor.fields.items():
        out[key] = getattr(obj, attr)
    out['createdAt'] = obj.created_at
    out['updatedAt'] = obj.updated_at
    if relation is not None:
        related = getattr(obj, relation.attribute)
        if relation.many:
            out[relation.key] = [_serialize_nested(r) for r in related]
        else:
            out[relation.key] = _serialize_nested(related) if related is not None else None
    return jsonable_encoder(out)


def _serialize_nested(obj: SQLModel) -> Dict[str, Any]:
    return serialize_record(BY_MODEL[type(obj)], obj)


def record_response(descriptor: ResourceDescriptor, obj: SQLModel, status_code: int = 200, relation: Optional[Relation] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=serialize_record(descriptor, obj, relation))


def page_envelope(total: int, query: ListQuery, data: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Build the list envelope; `totalPages` is 0 for an empty collection."""
    return {
        'total': total,
        'page': query.page,
        'totalPages': math.ceil(total / query.limit),
        'data': data,
    }


def page_response(descriptor: ResourceDescriptor, total: int, rows: List[SQLModel], query: ListQuery) -> JSONResponse:
    relation = descriptor.relation(query.populate)
    data = [serialize_record(descriptor, r, relation) for r in rows]
    return JSONResponse(status_code=200, content=page_envelope(total, query, data))


def not_found_response() -> JSONResponse:
    return JSONResponse(status_code=404, content={'message': NOT_FOUND})


def deleted_response() -> JSONResponse:
    return JSONResponse(status_code=200, content={'message': DELETED})


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={'error': message})
