import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from noteapp.api_routers.api import api_router
from noteapp.features.auth.models import PendingVerification, User  # noqa: F401
from noteapp.features.notes.models.note import Note  # noqa: F401
from noteapp.platform.config import settings
from noteapp.platform.db.session import init_models
from noteapp.platform.exceptions import add_exception_handlers
from noteapp.platform.logger import get_logger

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
    yield


app = FastAPI(
    title="Note App API",
    description="Passcode-authenticated personal notes",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": "Note App API",
        "description": "Sign in with a one-time passcode and keep personal notes.",
        "version": "1.0.0",
        "docs_url": "/docs",
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(api_router)
