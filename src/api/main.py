"""View Presenters API.

Serves the presenter registry for introspection and renders the library
catalog through presenters:
- Presenter summaries (model readers, controller methods, helpers)
- Book catalog as list, collection, table or paginated views
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.api.routes import books, presenters
from src.library.catalog import get_book_catalog
from src.presenters.registry import get_presenter_registry
from src.presenters.templating import DEFAULT_FORMAT

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: pre-load the registries so requests only read them
    logger.info("Loading presenters...")
    presenter_registry = get_presenter_registry()
    logger.info(f"Loaded {presenter_registry.count()} presenters")

    logger.info("Loading book catalog...")
    catalog = get_book_catalog()
    logger.info(f"Loaded {catalog.count()} books")

    logger.info(f"View Presenters API ready (default format: {DEFAULT_FORMAT})")
    yield
    # Shutdown
    logger.info("Shutting down View Presenters API")


# Create FastAPI app
app = FastAPI(
    title="View Presenters API",
    description="""
## Presenter layer

Presenters wrap a model instance and the current request's controller,
exposing display-ready values to templates.

### Key Endpoints

- `GET /v1/presenters` - List registered presenters
- `GET /v1/presenters/{key}` - Describe one presenter
- `GET /v1/books` - Catalog (`?view=list|collection|table|pagination`)
- `GET /v1/books/{id}` - Book detail (`?format=html|json`)
""",
    version=__version__,
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

# Include routers with /v1 prefix
app.include_router(presenters.router, prefix="/v1")
app.include_router(books.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "View Presenters API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "presenters": "/v1/presenters",
            "books": "/v1/books",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    presenter_registry = get_presenter_registry()
    catalog = get_book_catalog()

    return {
        "status": "healthy",
        "presenters_loaded": presenter_registry.count(),
        "presenter_keys": presenter_registry.list_keys(),
        "books_loaded": catalog.count(),
        "default_format": DEFAULT_FORMAT,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
