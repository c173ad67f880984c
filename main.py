"""Main application"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from services.logger_config import setup_logging
from api.endpoints import router
from core.exceptions import TransportError, UploadAdmissionError
from services.factory import clear_instances

setup_logging()
logger = logging.getLogger(settings.LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting application...")
    if settings.mock_mode:
        logger.warning("No extraction credential configured - running in mock mode")
    else:
        logger.info(f"Extraction mode: live ({settings.LLM_MODEL_NAME})")
    yield

    logger.info("Shutting down application...")
    clear_instances()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
)


@app.exception_handler(UploadAdmissionError)
async def upload_admission_handler(request: Request, exc: UploadAdmissionError):
    logger.warning(f"Upload rejected on {request.url.path}: {exc.log_format()} - {exc.details}")
    return JSONResponse(status_code=400, content={"error": exc.message, "details": exc.details})


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError):
    logger.error(f"Request failed on {request.url.path}: {exc.log_format()}")
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process documents", "details": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.warning(f"Malformed upload on {request.url.path}: {details}")
    return JSONResponse(status_code=400, content={"error": "File upload error", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process documents", "details": str(exc)},
    )


app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.PORT,
        log_level="info"
    )
