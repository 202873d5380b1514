import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from looply.config import settings
from looply.database.supabase_client import get_supabase
from looply.modules.auth import routes as auth_routes
from looply.modules.users import routes as users_routes
from looply.modules.items import routes as items_routes
from looply.modules.swipes import routes as swipes_routes
from looply.modules.favorites import routes as favorites_routes
from looply.modules.swaps import routes as swaps_routes
from looply.modules.claims import routes as claims_routes
from looply.modules.drives import routes as drives_routes
from looply.modules.donations import routes as donations_routes
from looply.modules.forums import routes as forums_routes
from looply.modules.messages import routes as messages_routes

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
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


SECURITY_HEADERS = [
    (b"X-Content-Type-Options", b"nosniff"),
    (b"X-Frame-Options", b"DENY"),
    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
]


class SecurityHeadersMiddleware:
    """Adds security headers; auth responses carry tokens and are never cached."""

    def __init__(self, app, no_store_prefix: str = "/api/v1/auth"):
        self.app = app
        self.no_store_prefix = no_store_prefix

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        no_store = scope["path"].startswith(self.no_store_prefix)

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend(SECURITY_HEADERS)
                if no_store:
                    message["headers"].append((b"Cache-Control", b"no-store"))
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

for module_routes in (
    auth_routes,
    users_routes,
    items_routes,
    swipes_routes,
    favorites_routes,
    swaps_routes,
    claims_routes,
    drives_routes,
    donations_routes,
    forums_routes,
    messages_routes,
):
    app.include_router(module_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    storage = "S3" if settings.s3_configured else "Supabase Storage"
    logger.info(f"{settings.app_name} starting ({settings.environment}), listing images in {storage}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {
        "message": "Welcome to Looply",
        "status": "healthy",
        "environment": settings.environment,
        "api": "/api/v1",
    }


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Ready once the marketplace database answers a one-row read"""
    try:
        get_supabase().table("listings").select("id").limit(1).execute()
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unavailable", "detail": str(e)})
    return {"status": "ready"}
