from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from veranstalter.core.config import GRAPHQL_PATH, LOG_FORMAT, LOG_LEVEL
from veranstalter.core.database import init_models
from veranstalter.core.logging import RequestIDMiddleware, setup_logging
from veranstalter.resolvers.schema import graphql_router
from veranstalter.routers import veranstalter_route, veranstalter_write_route
from veranstalter.routers.error_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    yield


def create_app(init_db: bool = True) -> FastAPI:
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    app = FastAPI(title="Veranstalter", version="1.0.0", lifespan=lifespan if init_db else None)

    # ─── MIDDLEWARE ───────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "Accept", "If-Match", "If-None-Match", "X-Request-ID"],
        expose_headers=["ETag", "Location", "X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ─── REST API ROUTERS ─────────────────────────────────────────────
    app.include_router(veranstalter_route.router)
    app.include_router(veranstalter_write_route.router)

    # ─── GRAPHQL ──────────────────────────────────────────────────────
    app.include_router(graphql_router, prefix=GRAPHQL_PATH)
    return app


app = create_app()
