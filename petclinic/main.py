from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import get_settings
from .advice import register_exception_handlers
from .routers import owners, pets, pettypes

settings = get_settings()

# Logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials="*" not in settings.cors_allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With"],
        expose_headers=["Location", "Content-Type"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "env": settings.env, "security": settings.security_enabled}

    # Routers
    app.include_router(owners.router, prefix="/api/owners", tags=["owners"])
    app.include_router(pets.router, prefix="/api/pets", tags=["pets"])
    app.include_router(pettypes.router, prefix="/api/pettypes", tags=["pettypes"])

    logger.info("%s started (env=%s, security=%s)", settings.app_name, settings.env, settings.security_enabled)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("petclinic.main:app", host="0.0.0.0", port=9966, reload=settings.env == "dev")
