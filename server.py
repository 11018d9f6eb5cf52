from typing import Optional
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from app.api.v1.router import api_router
from app.core.config_env import Settings, get_settings
from app.db.session import init_db, make_engine, make_session_factory
from app.services.seed import seed_defaults
from app.utils.media import URL_PREFIX, ensure_dir

# -------------------- ЛОГИ --------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("civic_api")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Собирает приложение из явно переданных настроек: секрет, БД и каталог загрузок
    живут в app.state, а не в глобальных переменных модулей.
    """
    settings = settings or get_settings()

    app = FastAPI(title="Civic Issues Reporter API")
    app.state.settings = settings
    app.state.engine = make_engine(settings.DATABASE_URL)
    app.state.session_factory = make_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    upload_dir = Path(settings.UPLOAD_DIR).resolve()
    # каталог создаётся на старте, сборка приложения не трогает диск
    app.mount(URL_PREFIX, StaticFiles(directory=str(upload_dir), check_dir=False), name="uploads-static")

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    def on_startup():
        ensure_dir(str(upload_dir))
        init_db(app.state.engine)
        if settings.SEED_DEFAULTS:
            db = app.state.session_factory()
            try:
                seed_defaults(db, settings.BCRYPT_ROUNDS)
            finally:
                db.close()
        logger.info("Database ready at %s; uploads in %s", app.state.engine.url.render_as_string(hide_password=True), upload_dir)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.engine.dispose()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=3001)
