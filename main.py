from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config import settings
from database.connection import init_db
import logging
import os
import uvicorn

# =====================================================
# * Routers
# =====================================================
from audio.routes import router as audio_router
from albums.routes import router as albums_router

# =====================================================
# * Global logging
# =====================================================
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"🌍 {settings.PROJECT_NAME} backend started in '{settings.ENV}' mode.")
    yield

# =====================================================
# * Application
# =====================================================
app = FastAPI(
    title=f"{settings.PROJECT_NAME} Backend",
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =====================================================
# * Error handlers
# =====================================================
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️ Invalid request on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request.", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled exception on {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal error"})

# =====================================================
# * Routes
# =====================================================
app.include_router(audio_router, tags=["Audios"])
app.include_router(albums_router, prefix="/albums", tags=["Albums"])


@app.get("/", summary="Backend root")
def root():
    return {
        "message": f"🚀 {settings.PROJECT_NAME} backend up",
        "version": settings.VERSION,
        "env": settings.ENV
    }


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, log_level="info")
