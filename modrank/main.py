"""
Mod Collection Ranker - FastAPI Application
Main entry point with REST API endpoints.
"""
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from modrank.config import config
from modrank.errors import FetchError, FormatError
from modrank.layers.collection import ModCollectionPipeline
from modrank.utils.logger import get_logger, set_trace_id


# Initialize FastAPI app
app = FastAPI(
    title="Mod Collection Ranker",
    description="Fetches a user's mod collection and ranks mods by secondary stat quality",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

pipeline = ModCollectionPipeline()

logger = get_logger("main")


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/api/mods")
async def get_mods(u: Optional[str] = Query(None, description="User whose mods to rank")):
    """
    Collect, score and rank a user's mods.

    Pages that fail to load are listed in failedPages and the
    response is marked partial instead of failing the request.
    """
    if not u:
        raise HTTPException(status_code=400, detail="Query parameter 'u' is required")

    trace_id = set_trace_id()
    logger.info("mods_request", user=u, trace_id=trace_id)

    try:
        result = await pipeline.collect(u)
    except (FetchError, FormatError) as e:
        logger.error("mods_request_error", error=str(e), error_type=type(e).__name__, user=u)
        raise HTTPException(status_code=502, detail=str(e))

    response = result.to_dict()
    response["traceId"] = trace_id
    return response


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    raise HTTPException(status_code=404)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
