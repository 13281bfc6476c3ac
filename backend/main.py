# backend/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

load_dotenv()

from config import Settings, settings as default_settings
from database import init_db, make_engine, make_session_factory
from models.product import Product
from routes.products import router as products_router
from utils.images import ImageStore

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings = default_settings) -> FastAPI:
    # Uploads - the directory must exist before StaticFiles is mounted
    image_store = ImageStore(settings.UPLOAD_DIR, settings.PUBLIC_BASE_URL)
    image_store.ensure_dir()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = make_engine(settings.database_url, pool_size=settings.DB_POOL_SIZE)
        init_db(engine)
        app.state.engine = engine
        app.state.session_factory = make_session_factory(engine)
        logger.info("DB connected (%s)", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()
            logger.info("DB connections closed")

    app = FastAPI(title="Butter Inventory API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.image_store = image_store

    app.mount("/uploads/images", StaticFiles(directory=str(image_store.upload_dir)), name="images")

    # The shop app is served from several origins (Expo web, device builds)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # The shop app reads failures from an "error" key
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    app.include_router(products_router)

    @app.get("/api")
    def read_root():
        return {"message": f"API is running ({Product.__tablename__})"}

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=default_settings.PORT)
