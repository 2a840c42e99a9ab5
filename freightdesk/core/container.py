"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

from freightdesk.core.config import Settings, get_settings
from freightdesk.infrastructure.carriers import (
    CarrierClient,
    FedexAddressClient,
    MockCarrierClient,
    RapidDealsClient,
)
from freightdesk.infrastructure.database.session import get_engine

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    _carrier: CarrierClient | None = field(default=None, init=False)
    _fedex: FedexAddressClient | None = field(default=None, init=False)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    @property
    def carrier(self) -> CarrierClient:
        if self._carrier is None:
            if self.settings.carrier.mock:
                logger.warning("Carrier mock mode enabled; quotes and orders use sample data")
                self._carrier = MockCarrierClient()
            else:
                self._carrier = RapidDealsClient(self.settings.carrier)
        return self._carrier

    @property
    def fedex(self) -> FedexAddressClient:
        if self._fedex is None:
            self._fedex = FedexAddressClient(self.settings.fedex)
        return self._fedex

    async def shutdown(self) -> None:
        if self._carrier is not None:
            await self._carrier.aclose()
            self._carrier = None
        if self._fedex is not None:
            await self._fedex.aclose()
            self._fedex = None


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
