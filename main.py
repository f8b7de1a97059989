from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from api.routes import create_router
from config import get_settings
import logging

# Initialize logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_dependencies(app: FastAPI) -> None:
    """Build whichever stage dependencies the caller did not provide."""
    from db import get_redis, get_supabase
    from services.blob_service import BlobStagingService
    from services.llm_service import get_anthropic_llm
    from services.project_service import ProjectController
    from services.project_store import ProjectStore

    settings = get_settings()
    state = app.state
    if getattr(state, "staging", None) is None:
        state.staging = BlobStagingService(get_supabase(), settings.staging_bucket)
    if getattr(state, "llm", None) is None:
        state.llm = get_anthropic_llm()
    if getattr(state, "controller", None) is None:
        store = ProjectStore(get_redis(), settings.project_key)
        state.controller = ProjectController(store, state.staging, state.llm)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Report failures under both `detail` and the `error` key browser clients read."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events for the FastAPI application."""
    logger.info("Starting Bid Comparison API")
    build_dependencies(app)
    yield
    logger.info("Shutting down Bid Comparison API")


def create_app(staging=None, llm=None, controller=None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Bid Comparison API",
        description="API for extracting RFP requirements and comparing bids using Claude",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.state.staging = staging
    app.state.llm = llm
    app.state.controller = controller

    app.include_router(create_router())

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=2500, reload=True)
