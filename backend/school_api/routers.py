"""HTTP routes for the course, student and teacher resources.

`build_router` produces the same five endpoints for any resource
descriptor. Query parameters are taken as raw strings so malformed
values reach the normalizer (and fall back to defaults) instead of
failing request validation.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlmodel import Session

from .database import get_session
from .resources import ResourceDescriptor
from .schemas import ErrorOut, MessageOut, PageEnvelope
from .services import ResourceService


def build_router(descriptor: ResourceDescriptor) -> APIRouter:
    """Return an `APIRouter` serving `/{descriptor.name}`."""
    router = APIRouter(prefix=f"/{descriptor.name}", tags=[descriptor.tag])
    noun = descriptor.noun
    populate_help = f"Populate with related data: {', '.join(descriptor.relations)}"
    required = ", ".join(descriptor.fields)
    error = {500: {"model": ErrorOut, "description": "Store failure"}}
    not_found = {404: {"model": MessageOut, "description": "Not found"}}

    def service(session: Session = Depends(get_session)) -> ResourceService:
        return ResourceService(session, descriptor)

    @router.post(
        "",
        status_code=201,
        summary=f"Create a new {noun}",
        description=f"Fields: {required}. The payload is passed to the store unvalidated.",
        responses=error,
    )
    def create(payload: Optional[Dict[str, Any]] = Body(default=None), svc: ResourceService = Depends(service)):
        return svc.create(payload)

    @router.get("", summary=f"Get all {descriptor.name}", responses={200: {"model": PageEnvelope}, **error})
    def list_records(
        page: Optional[str] = Query(default=None, description="Page number (default 1)"),
        limit: Optional[str] = Query(default=None, description="Number of items per page (default 10)"),
        sort: Optional[str] = Query(default=None, description="Sort order by creation time: asc or desc (default desc)"),
        populate: Optional[str] = Query(default=None, description=populate_help),
        svc: ResourceService = Depends(service),
    ):
        return svc.list(page=page, limit=limit, sort=sort, populate=populate)

    @router.get("/{record_id}", summary=f"Get a {noun} by ID", responses={**not_found, **error})
    def get_record(
        record_id: str,
        populate: Optional[str] = Query(default=None, description=populate_help),
        svc: ResourceService = Depends(service),
    ):
        return svc.get(record_id, populate)

    @router.put("/{record_id}", summary=f"Update a {noun}", responses={**not_found, **error})
    def update_record(
        record_id: str,
        payload: Optional[Dict[str, Any]] = Body(default=None),
        svc: ResourceService = Depends(service),
    ):
        return svc.update(record_id, payload)

    @router.delete("/{record_id}", summary=f"Delete a {noun}", responses={200: {"model": MessageOut}, **not_found, **error})
    def delete_record(record_id: str, svc: ResourceService = Depends(service)):
        return svc.delete(record_id)

    return router
