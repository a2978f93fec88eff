#!/usr/bin/env python3

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import ParserConfig, parser_config
from .core.dependencies import (
    clear_preloaded_graph,
    get_config,
    get_preloaded_graph,
    load_preloaded_graph,
)
from .core.logging import setup_logging
from .models.models import EdgeListResponse, GraphResponse, NodeListResponse, ParseRequest
from .services.domain.graphml import GraphMLError, ValidatedGraph

logger = logging.getLogger(__name__)

# Application start time for uptime calculation
_app_start_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    config = get_config()
    setup_logging(config.LOG_LEVEL)
    logger.info("Starting GraphML parser service")

    await startup_tasks(config)

    yield

    # Shutdown
    clear_preloaded_graph()
    logger.info("Shutting down GraphML parser service")


async def startup_tasks(config: ParserConfig):
    """Preload the configured GraphML document"""
    try:
        graph = load_preloaded_graph(config)
        if graph is not None:
            logger.info(
                f"Preloaded {config.GRAPHML_PATH}: {len(graph.nodes)} nodes, {len(graph.edges)} edges"
            )
    except (OSError, GraphMLError) as e:
        logger.error(f"Failed to preload GraphML document {config.GRAPHML_PATH}: {e}")
        raise


app = FastAPI(
    title="GraphML Parser API",
    description="API for parsing and validating service-architecture GraphML documents",
    version=parser_config.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=parser_config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def limit_parse_request_size(request: Request, call_next):
    """Reject oversized /parse bodies from Content-Length before they are read"""
    if request.method == "POST" and request.url.path == "/parse":
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > parser_config.MAX_REQUEST_BYTES:
            logger.warning(
                f"Rejected /parse request of {content_length} bytes (limit {parser_config.MAX_REQUEST_BYTES})"
            )
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body exceeds {parser_config.MAX_REQUEST_BYTES} bytes"}
            )
    return await call_next(request)


# Add version header middleware
@app.middleware("http")
async def add_version_header(request, call_next):
    """Add version information to response headers"""
    response = await call_next(request)
    response.headers["X-API-Version"] = parser_config.APP_VERSION
    return response


@app.exception_handler(GraphMLError)
async def graphml_error_handler(request: Request, exc: GraphMLError):
    """Render rejected documents as 400 with an error body"""
    from .handlers.graph import build_error_response, log_rejection

    log_rejection(exc)
    return JSONResponse(
        status_code=400,
        content=build_error_response(exc).model_dump(exclude_none=True)
    )


@app.get("/")
async def root():
    """API description"""
    return {
        "message": "GraphML Parser API",
        "endpoints": [
            "POST /parse - parse and validate a GraphML document",
            "GET /graph - get the preloaded graph",
            "GET /nodes - get only nodes",
            "GET /edges - get only edges",
        ],
    }


@app.get("/healthz")
async def health_check():
    """Liveness probe - checks if application is alive and can serve requests"""
    current_time = time.time()
    return {
        "status": "healthy",
        "timestamp": current_time,
        "uptime": current_time - _app_start_time,
        "api_version": parser_config.APP_VERSION,
    }


# Parse Routes

@app.post("/parse", response_model=GraphResponse, response_model_exclude_none=True)
async def parse_document(
    request: ParseRequest,
    config: ParserConfig = Depends(get_config)
):
    """Parse and validate a GraphML document.

    Returns the validated graph, or 400 with an `error` message naming the
    offending node/edge and field when the document is rejected.
    """
    from .handlers.graph import handle_parse
    return await handle_parse(request, config.MAX_DOCUMENT_BYTES)


# Graph Read Routes

@app.get("/graph", response_model=GraphResponse, response_model_exclude_none=True)
async def get_graph(graph: ValidatedGraph = Depends(get_preloaded_graph)):
    """Get the graph loaded from GRAPHML_PATH"""
    from .handlers.graph import handle_get_graph
    return handle_get_graph(graph)


@app.get("/nodes", response_model=NodeListResponse, response_model_exclude_none=True)
async def get_nodes(graph: ValidatedGraph = Depends(get_preloaded_graph)):
    """Get only the nodes of the preloaded graph"""
    from .handlers.graph import handle_get_nodes
    return handle_get_nodes(graph)


@app.get("/edges", response_model=EdgeListResponse, response_model_exclude_none=True)
async def get_edges(graph: ValidatedGraph = Depends(get_preloaded_graph)):
    """Get only the edges of the preloaded graph"""
    from .handlers.graph import handle_get_edges
    return handle_get_edges(graph)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=parser_config.API_HOST, port=parser_config.API_PORT)
