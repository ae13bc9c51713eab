import importlib
import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from config.database import Database
from config.settings import Settings, get_settings

logger = logging.getLogger("attendance")


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if root.handlers:
        # already configured by the host (uvicorn --log-config, pytest)
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)


#load all routes
def load_routes(directory: Path):
    routers = []
    for item in sorted(directory.rglob("*_routes.py")):
        module_name = ".".join(item.relative_to(directory.parent).with_suffix("").parts)
        module = importlib.import_module(module_name)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database.from_settings(settings)
        if settings.AUTO_CREATE_TABLES:
            database.create_all()
        app.state.database = database
        logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings

    # CORS: use our parsed list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    for router in load_routes(Path(__file__).parent / "api"):
        app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check():
        try:
            app.state.database.ping()
        except SQLAlchemyError:
            logger.exception("Health check could not reach the database")
            raise HTTPException(status_code=503, detail="Storage unavailable")
        return {"status": "ok"}

    return app


app = create_app()

# run locally with: python main.py
if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", get_settings().PORT or 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=get_settings().DEBUG)
