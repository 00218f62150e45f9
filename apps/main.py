from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import get_settings
from core.db import init_models
from core.logging import configure_logging
from apps.routes import blueprint

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await init_models()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    version="1.0.0",
    lifespan=lifespan,
)

# Optional: Configure CORS if you have a frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

#Routes Inclusions
app.include_router(blueprint.router)

# Health check route
@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}
