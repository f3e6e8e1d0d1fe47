import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config.settings import settings
from app.core.dependencies import require_permission
from app.database.memory_store import Datastore, get_datastore
from app.modules.users.models import User
from app.modules.users import routes as users_routes
from app.modules.auth import routes as auth_routes
from app.modules.metadata import routes as metadata_routes
from app.modules.access_requests import routes as access_requests_routes
from app.modules.access_policies import routes as access_policies_routes
from app.modules.notifications import routes as notifications_routes
from app.scripts.seed_sample_data import seed_sample_data

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.state.datastore = Datastore()
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api")
app.include_router(users_routes.router, prefix="/api")
app.include_router(metadata_routes.router, prefix="/api")
app.include_router(access_requests_routes.router, prefix="/api")
app.include_router(access_policies_routes.router, prefix="/api")
app.include_router(notifications_routes.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    if settings.seed_sample_data:
        seed_sample_data(app.state.datastore)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.post("/api/init-sample-data")
async def init_sample_data(
    current_user: User = Depends(require_permission("sample_data:create")),
    datastore: Datastore = Depends(get_datastore)
):
    """Seed sample schemas, users and policies (admin only)"""
    summary = seed_sample_data(datastore)
    return {"success": True, "message": "Sample data initialized successfully", "created": summary}


@app.get("/")
async def root():
    return {"message": "Welcome to access-workflow-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: the datastore is in-process, so ready once the app is up."""
    return {"status": "ready"}
