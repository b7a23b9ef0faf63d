"""Manas Mitra wellness companion server."""

from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from manas_mitra.api import router
from manas_mitra.api.deps import get_completion_client, get_settings
from manas_mitra.logs import configure_logging

# Load .env from the project root (src/manas_mitra/main.py -> .env)
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release pooled connections to the completion service
    await get_completion_client().aclose()


app = FastAPI(title="Manas Mitra", version="0.1.0", lifespan=lifespan)

# Allow frontend to connect
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
