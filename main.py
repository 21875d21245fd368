from contextlib import asynccontextmanager

from fastapi import FastAPI

from moodjournal.api.endpoints import router
from moodjournal.core.config import settings
from moodjournal.services.http_client import http_client_manager
from moodjournal.shared.correlation import CorrelationMiddleware
from moodjournal.shared.errors import register_exception_handlers
from moodjournal.shared.logging_config import setup_logging

# Configure logging
setup_logging(service_name=settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await http_client_manager.startup()
    yield
    await http_client_manager.shutdown()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Mood Journal Service",
        description="Journal entries with AI mood analysis and supportive messages",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)
    app.include_router(router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {"message": "Mood Journal Service Running"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
