"""FastAPI application: routers, error mapping, logo files."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlmodel import SQLModel

import models  # noqa: F401  registers the tables on SQLModel.metadata
from core.config import settings
from core.logging import configure_logging
from db.session import engine, session_factory
from routers import clients, documents, editors, pdf
from routers import settings as settings_router
from services.editor import EditorRegistry
from services.errors import NotFoundError, StorageError, ValidationError


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    if settings.environment == "development":
        SQLModel.metadata.create_all(engine)
    logger.info(f"Invoicer API started ({settings.environment})")
    yield
    app.state.editors.close_all()


app = FastAPI(
    title="Invoicer",
    description="Invoices, quotes and proforma invoices for a small business.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.editors = EditorRegistry(session_factory)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


app.include_router(documents.router, prefix="/api")
app.include_router(pdf.router, prefix="/api", tags=["pdf"])
app.include_router(editors.router, prefix="/api")
app.include_router(clients.router, prefix="/api")
app.include_router(settings_router.router, prefix="/api")

Path(settings.media_root).mkdir(parents=True, exist_ok=True)
app.mount(settings.media_base_url, StaticFiles(directory=settings.media_root), name="media")


@app.get("/")
def root():
    return {"message": "Invoicer API. Visit /docs for API documentation."}
