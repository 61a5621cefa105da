"""FastAPI application serving flow graphs to a rendering client."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

from server.graph_routes import router as graph_router
from server.session_routes import router as session_router
from server.session_store import get_session, init_store

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured export folder on startup."""
    await init_store()
    yield


app = FastAPI(
    title="Flowscope API",
    description="API server for flow export graphs: flow overview, operation graphs and filters",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(session_router, prefix="/api")
app.include_router(graph_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    session = get_session()
    return {
        "status": "ok",
        "version": "0.1.0",
        "loaded": session.data is not None,
        "flows": len(session.data.flows) if session.data else 0,
        "endpoints": {
            "dataset": "/api/dataset",
            "graph": "/api/graph",
            "flows": "/api/flows/{flow_id}",
            "settings": "/api/settings",
        },
    }


def main() -> None:
    import uvicorn
    uvicorn.run(
        app,
        host=os.getenv("FLOWSCOPE_HOST", "127.0.0.1"),
        port=int(os.getenv("FLOWSCOPE_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
