# app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging
from app.core.middleware import register_middleware
from app.core.security import PasswordHasher, TokenCodec
from app.db.init_db import init_db, seed_initial_data
from app.db.session import create_db_engine, create_session_factory
from app.web.spa import mount_frontend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run startup logic
    state = app.state
    init_db(state.engine)
    db = state.session_factory()
    try:
        seed_initial_data(db, state.settings, state.password_hasher)
    finally:
        db.close()
    yield


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- SHARED COMPONENTS ----------
    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = TokenCodec.from_settings(settings)

    register_exception_handlers(app)

    # ---------- GUARDS ----------
    register_middleware(app, settings)

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    # ---------- FRONTEND ----------
    mount_frontend(app, settings.frontend_dist_dir, api_prefix=settings.api_prefix)

    return app


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)


app = create_application()


if __name__ == "__main__":
    run()
