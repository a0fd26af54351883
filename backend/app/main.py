from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.responses import register_exception_handlers
from app.api.routes import router
from app.db.session import init_models
from app.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_models()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Market Relay API", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
