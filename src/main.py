"""AI Code Review - FastAPI entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.config import settings
from src.core.exceptions import ApiException
from src.core.logging import get_logger
from src.core.schemas.responses import ErrorResponse, HealthResponse
from src.services.dedupe.client import close_db, connect_db
from src.services.github.routes import router as github_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the dedupe store on startup and close it on shutdown."""
    if settings.dedupe_backend == "mongodb":
        await connect_db()
    yield
    await close_db()


app = FastAPI(
    title="AI Code Review",
    description="Automated line-level review of GitHub pull requests",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ApiException)
async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    """Handle custom API exceptions and return structured error response."""
    logger.warning(f"API error: {exc.message} (status={exc.status_code})")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            details=exc.details if exc.details else None,
        ).model_dump(),
    )

# Include routes
app.include_router(github_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "ai-code-review",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting AI Code Review on {settings.host}:{settings.port}")
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
