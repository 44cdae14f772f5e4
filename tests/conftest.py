from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from homecare.main import create_app
from tests.routes import router as failure_router


@pytest.fixture
def app() -> FastAPI:
    """Fresh application with the failure routes mounted."""
    app = create_app()
    app.include_router(failure_router)
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app in-process.

    Starlette re-raises unhandled exceptions after the 500 handler has sent its
    response; raise_app_exceptions=False lets tests inspect that response.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client
