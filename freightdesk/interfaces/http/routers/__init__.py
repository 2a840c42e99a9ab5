from fastapi import APIRouter

from freightdesk.interfaces.http.routers import (
    addresses,
    admin,
    auth,
    balance,
    customers,
    insurance,
    orders,
    payment_config,
    quotes,
    roles,
    topups,
    users,
)


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    router.include_router(roles.router, prefix="/roles", tags=["roles"])
    router.include_router(customers.router, prefix="/customers", tags=["customers"])
    router.include_router(addresses.router, prefix="/addresses", tags=["addresses"])
    router.include_router(balance.router, prefix="/balance", tags=["balance"])
    router.include_router(topups.router, prefix="/top-up", tags=["top-up"])
    router.include_router(payment_config.router, prefix="/admin/payment-config", tags=["admin"])
    router.include_router(admin.router, prefix="/admin", tags=["admin"])
    router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
    router.include_router(orders.router, prefix="/orders", tags=["orders"])
    router.include_router(insurance.router, prefix="/insurance", tags=["insurance"])
    return router


__all__ = [
    "create_api_router",
]
