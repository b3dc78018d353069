"""
dtlearn FastAPI application entrypoint.

Run with: uvicorn dtlearn.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dtlearn.database import Base, engine
from dtlearn.models_db import DatasetModel, EvaluationRunModel  # noqa: F401 (register tables)
from dtlearn.routes import api_router
from dtlearn.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create DB tables on startup."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="dtlearn API",
    description="""ID3 decision-tree learning over discrete-valued examples.

Upload a CSV dataset, learn a tree (information gain or gain ratio), classify
new examples with a returned tree, and measure held-out accuracy.
Learned trees are returned to the caller and never stored.
""",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for local React dev (Vite default port 5173)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
def root():
    return {"service": "dtlearn", "docs": "/docs", "api": "/api"}
