"""Protocol shared by the live and sample carrier clients."""

from __future__ import annotations

from typing import Any, Protocol


class CarrierClient(Protocol):
    async def aclose(self) -> None:
        ...

    async def submit_ltl_quote(self, body: dict[str, Any]) -> str:
        ...

    async def submit_fba_quote(self, body: dict[str, Any]) -> str:
        ...

    async def submit_tl_quote(self, body: dict[str, Any]) -> tuple[str, list[dict[str, Any]]]:
        ...

    async def get_rates(self, quote_order_id: str) -> list[dict[str, Any]]:
        ...

    async def poll_rates(self, quote_order_id: str) -> list[dict[str, Any]]:
        ...

    async def place_order(self, body: dict[str, Any]) -> dict[str, Any]:
        ...

    async def cancel_order(self, order_number: str) -> dict[str, Any]:
        ...

    async def tracking(self, order_number: str) -> dict[str, Any]:
        ...

    async def order_info(self, order_number: str) -> dict[str, Any]:
        ...

    async def insurance_quote(self, body: dict[str, Any]) -> dict[str, Any]:
        ...
