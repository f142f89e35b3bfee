from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cloudru_storage.config.logger import configure_logging, get_logger
from cloudru_storage.config.settings import get_settings
from cloudru_storage.exceptions import ConfigurationError
from cloudru_storage.storage.router import router as storage_router

settings = get_settings()

configure_logging(level=settings.logging.level)
logger = get_logger(__name__)

app = FastAPI(
    title=settings.title,
    description=settings.description,
    version=settings.version,
    debug=settings.debug,
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Storage is not configured: %s", exc.message)
    return JSONResponse(status_code=503, content={"detail": exc.message, "field": exc.field})


@app.on_event("startup")
async def startup_event():
    logger.info("Starting %s v%s", settings.title, settings.version)


@app.get("/health", tags=["Main"])
async def root():
    return {"app": settings.title, "version": settings.version, "status": "running"}


app.include_router(storage_router)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")
