from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from app.api import auth, carriers, customers, dashboard, dispatches, followups, invoices, leads, orders, quotes, users
from app.core.config import settings
from app.core.errors import StoreUnavailable, register_exception_handlers
from app.core.logging_config import configure_logging
from app.core.redis import init_redis, close_redis, get_redis
from app.core.metrics import request_count, request_duration, db_connected, get_metrics_text
from app.db.session import Database
import time
import logging

logger = logging.getLogger(__name__)


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            self._observe(request, 500, start_time)
            raise
        self._observe(request, response.status_code, start_time)
        return response

    @staticmethod
    def _observe(request: Request, status_code: int, start_time: float) -> None:
        # route templates keep label cardinality bounded
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        request_count.labels(
            method=request.method,
            endpoint=endpoint,
            status=status_code
        ).inc()
        request_duration.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(time.time() - start_time)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info("Application starting...")

    database = getattr(app.state, "database", None)
    if database is None:
        database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        app.state.database = database
    try:
        await database.connect()
        await database.create_all()
        db_connected.set(1)
        logger.info("Database connected")
    except StoreUnavailable as e:
        db_connected.set(0)
        logger.critical(f"Database connection failed: {e.message}")
        raise

    logger.info("Initializing Redis connection...")
    try:
        await init_redis()
    except Exception as e:
        logger.error(f"Redis connection failed, continuing without it: {e}")

    yield

    logger.info("Application shutting down...")
    await close_redis()
    await database.dispose()
    db_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(dashboard.router)
app.include_router(leads.router)
app.include_router(customers.router)
app.include_router(carriers.router)
app.include_router(orders.router)
app.include_router(dispatches.router)
app.include_router(quotes.router)
app.include_router(invoices.router)
app.include_router(followups.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check():
    redis = get_redis()
    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis is not None else "disabled",
            "database": "connected" if getattr(app.state, "database", None) is not None else "disconnected"
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check(request: Request):
    database: Database = getattr(request.app.state, "database", None)
    if database is None:
        return JSONResponse(status_code=503, content={"ready": False, "reason": "Database not configured"})
    try:
        await database.connect()
    except StoreUnavailable as e:
        db_connected.set(0)
        return JSONResponse(status_code=503, content={"ready": False, "reason": e.message})

    db_connected.set(1)
    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }
