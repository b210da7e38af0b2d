from __future__ import annotations

import random
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .environment import Environment
from .models import (
    EnvKeysOut,
    ErrorOut,
    MessageOut,
    QuoteOut,
    RandomNumberOut,
    SystemInfo,
    TimeOut,
)
from .quotes import QuoteClient

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
RANDOM_MIN = 1
RANDOM_MAX = 10000

ENDPOINTS = [
    ("/api/time", "Returns the current server time."),
    ("/api/random", "Returns a random number."),
    ("/api/quote", "Returns a random quote from an online API."),
    ("/api/secret", "Returns the value of an environment variable if set."),
    ("/api/envKeys", "Lists all environment variable keys."),
]

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# === Helpers ===


def current_time() -> str:
    return datetime.now().strftime(TIME_FORMAT)


def random_number(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randint(RANDOM_MIN, RANDOM_MAX)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        ErrorOut(error=str(exc.detail)).model_dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Settings,
    system_info: SystemInfo,
    environment: Environment,
    quotes: QuoteClient,
) -> FastAPI:
    """Build the application around an already-collected startup snapshot."""
    app = FastAPI(title="hostinfo", version="1.0.0")
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # === Page ===

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        return templates.TemplateResponse(
            request=request,
            name="index.html",
            context={
                "bg_color": settings.bg_color,
                "info": system_info,
                "endpoints": ENDPOINTS,
            },
        )

    # === API endpoints ===

    @app.get("/api/time", response_model=TimeOut)
    def get_time():
        return TimeOut(time=current_time())

    @app.get("/api/random", response_model=RandomNumberOut)
    def get_random():
        return RandomNumberOut(randomNumber=random_number())

    @app.get("/api/quote", response_model=QuoteOut)
    async def get_quote():
        return QuoteOut(quote=await quotes.get_quote())

    @app.get("/api/secret", responses={400: {"model": ErrorOut}})
    def get_secret(var_name: Optional[str] = Query(default=None, alias="varName")):
        if not var_name:
            raise HTTPException(status_code=400, detail="varName query parameter is required")
        value = environment.get(var_name)
        if value:
            return {var_name: value}
        return MessageOut(message="env not set")

    @app.get("/api/envKeys", response_model=EnvKeysOut)
    def get_env_keys():
        return EnvKeysOut(keys=environment.keys())

    return app
