from fastapi import FastAPI

from homecare.config import settings
from homecare.handlers import install_exception_handlers
from homecare.logging import get_logger
from homecare.middleware import RequestContextMiddleware
from homecare.schemas import envelope
from homecare.schemas.envelope import ResponseEnvelope

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the application with envelope error handling and request tracing.

    Routers included on the returned app get the same error contract: any
    exception they raise comes back to the client as a ResponseEnvelope.
    """
    app = FastAPI(title=settings.app_name)
    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)

    @app.get(
        "/health",
        response_model=ResponseEnvelope[dict[str, str]],
        response_model_exclude_none=True,
    )
    async def health() -> ResponseEnvelope[dict[str, str]]:
        """Liveness check used by load balancers and container orchestrators."""
        return envelope.success({"status": "ok"})

    logger.info("app_created", app_name=settings.app_name)
    return app


app = create_app()
