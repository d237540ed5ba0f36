import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rlschedule.config import settings
from rlschedule.routes import tournaments, week
from rlschedule.store import ScheduleStore, get_store

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "RL Tournament API"

app = FastAPI(title=SERVICE_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api"

# Include routers
app.include_router(tournaments.router, prefix=API_PREFIX, tags=["tournaments"])
app.include_router(week.router, prefix=API_PREFIX, tags=["week"])


def _available_endpoints():
    # Read from the routers themselves; app.routes may hold wrapped entries for included routers
    endpoints = ["GET /health"]
    for router in (tournaments.router, week.router):
        for r in router.routes:
            methods = getattr(r, "methods", None) or set()
            for method in sorted(methods - {"HEAD", "OPTIONS"}):
                endpoints.append(f"{method} {API_PREFIX}{r.path}")
    return endpoints


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched paths get the endpoint list; every other HTTP error is passed through"""
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"error": "Endpoint not found", "availableEndpoints": _available_endpoints()},
        )
    return await http_exception_handler(request, exc)


@app.on_event("startup")
def on_startup():
    # Honour an injected store so startup never reads the configured file in its place
    provider = app.dependency_overrides.get(get_store, get_store)
    store = provider()
    logger.info("Schedule loaded from %s (%d tournaments)", settings.schedule_path, store.document.entry_count())

    print("\n" + "=" * 80)
    print("REGISTERED ROUTES")
    print("=" * 80)
    for endpoint in _available_endpoints():
        print(endpoint)
    print("=" * 80 + "\n")


@app.get("/health")
def health_check(store: ScheduleStore = Depends(get_store)):
    """Liveness probe used by the mobile client's connection indicator"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "tournamentsLoaded": store.document.entry_count(),
    }
