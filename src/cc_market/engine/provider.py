"""FastAPI dependency: the process's MarketEngine.

The engine is created in the app lifespan and stored on `app.state`, so tests
can build isolated engines and swap them in via `app.dependency_overrides`.
"""

from fastapi import Request

from src.cc_common.errors import InternalError
from src.cc_market.engine.engine import MarketEngine


def get_market_engine(request: Request) -> MarketEngine:
    engine: MarketEngine | None = getattr(request.app.state, "market_engine", None)
    if engine is None:
        raise InternalError("Market engine not initialised")
    return engine
