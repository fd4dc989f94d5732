import os
import sys
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

# Ensure this directory is in the path for uvicorn and other runners
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

from config import ALLOWED_ORIGINS, APP_ENV
from database import init_db
from routes.auth_routes import router as auth_router
from routes.streak_routes import router as streak_router
from routes.day_routes import router as day_router
from routes.health_routes import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("=" * 50)
    logger.info("Available API:")
    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        if methods and route.path.startswith("/api"):
            logger.info(f"   {methods:<6} {route.path}")
    logger.info("=" * 50)
    yield


app = FastAPI(title="Wellness Tracker API", lifespan=lifespan)

# In development every origin is allowed, otherwise only ALLOWED_ORIGINS
if APP_ENV == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/api/v1/health-check")
async def health():
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth_router)
app.include_router(streak_router)
app.include_router(day_router)
app.include_router(health_router)

# Serve the frontend folder during development
frontend_dir = os.path.join(os.path.dirname(__file__), "..", "frontend")

if APP_ENV == "development" and os.path.exists(frontend_dir):
    app.mount("/", StaticFiles(directory=frontend_dir, html=True), name="frontend")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")), reload=APP_ENV == "development")
