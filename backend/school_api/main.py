"""FastAPI application entrypoint.

Controllers are intentionally thin: each resource router delegates to
`services.ResourceService`, which talks to the store and builds the
response envelope.

Endpoints implemented (for each of courses, students, teachers):
- POST   /{resource}
- GET    /{resource}?page=&limit=&sort=&populate=
- GET    /{resource}/{id}?populate=
- PUT    /{resource}/{id}
- DELETE /{resource}/{id}
plus GET /health.
"""

from fastapi import FastAPI, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
import json
import logging
import time
import uuid
from .database import create_db_and_tables
from .resources import ALL_RESOURCES
from .routers import build_router
from .config import settings

app = FastAPI(title="School Records API")
logger = logging.getLogger("school_api.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps local browser testers working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()

for _descriptor in ALL_RESOURCES:
    app.include_router(build_router(_descriptor))


def _request_log(request: Request, req_id: str, elapsed_ms: float, status_code=None) -> str:
    fields = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": elapsed_ms,
        "client": request.client.host if request.client else "unknown",
    }
    if status_code is not None:
        fields["status_code"] = status_code
    return json.dumps(fields, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", _request_log(request, req_id, elapsed_ms))
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info("request_done %s", _request_log(request, req_id, elapsed_ms, response.status_code))
    return response


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
