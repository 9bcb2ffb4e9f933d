"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.cc_account.api.router import router as account_router
from src.cc_admin.api.router import router as admin_router
from src.cc_catalog.infrastructure.loader import load_catalog
from src.cc_common.database import async_session_factory, engine
from src.cc_common.errors import AppError
from src.cc_common.response import error_response
from src.cc_gateway.middleware.request_log import RequestLogMiddleware
from src.cc_market.api.router import router as market_router
from src.cc_market.engine.engine import MarketEngine
from src.cc_portfolio.api.router import router as portfolio_router
from src.cc_trading.api.router import router as trade_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, load catalog, restore market state. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    market_engine = MarketEngine(
        catalog=load_catalog(settings.CATALOG_PATH),
        min_price_cents=settings.MIN_PRICE_CENTS,
        max_freeze_minutes=settings.MAX_FREEZE_MINUTES,
    )
    async with async_session_factory() as db:
        await market_engine.load(db)
    app.state.market_engine = market_engine
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(market_router, prefix="/api/v1")
app.include_router(trade_router, prefix="/api/v1")
app.include_router(portfolio_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
