"""
FastAPI application - Ingestion service entry point.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from loguru import logger

from api.routers import ingest


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Ingestion service starting...")

    yield

    logger.info("Shutting down ingestion service...")


app = FastAPI(
    title="Sports Score Ingestion API",
    description="Receives normalized match batches from the provider fetchers",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(ingest.router, tags=["Ingestion"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
