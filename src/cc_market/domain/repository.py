# src/cc_market/domain/repository.py
"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_catalog.domain.models import Catalog
from src.cc_market.domain.models import MarketState


class MarketRepositoryProtocol(Protocol):
    async def load_state(
        self, db: AsyncSession, catalog: Catalog
    ) -> MarketState | None: ...

    async def save_state(self, db: AsyncSession, state: MarketState) -> None: ...
