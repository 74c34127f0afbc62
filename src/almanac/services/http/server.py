from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ... import __version__
from ...api import call_api, get_api_functions
from ...bootstrap import configure_logging
from ...config import get_settings

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Almanac Local API", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Exceptions the calendar functions raise for bad input or missing state.
_CLIENT_ERRORS = (RuntimeError, TypeError, ValueError)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


@app.get("/api/functions")
async def list_api_functions(category: Optional[str] = None) -> JSONResponse:
    return JSONResponse({"functions": [func.describe() for func in get_api_functions(category)]})


@app.post("/api/functions/{function_name}")
async def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("Unknown calendar function requested: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except _CLIENT_ERRORS as exc:
        logger.info("Calendar function %s rejected %s: %s", function_name, request.arguments, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return JSONResponse({"name": function_name, "result": result})


def run_local_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    server = get_settings().server
    config = Config()
    config.bind = [f"{host or server.host}:{port or server.port}"]
    logger.info("Serving Almanac API on %s", config.bind[0])
    asyncio.run(serve(app, config))
