"""Menu structure and the permissions seeded for built-in roles."""

from __future__ import annotations

from .models import Permission

SUPER_ADMIN_ROLE = "Super Admin"
CUSTOMER_ROLE = "Customer"
SYSTEM_ROLES = frozenset({SUPER_ADMIN_ROLE, CUSTOMER_ROLE})

MENU_STRUCTURE: list[dict] = [
    {"key": "dashboard", "title": "Dashboard", "url": "/dashboard"},
    {"key": "get-quote", "title": "Quote", "url": "/quotes"},
    {"key": "orders", "title": "Orders", "url": "/orders"},
    {"key": "balance", "title": "Balance", "url": "/balance"},
    {"key": "saved-addresses", "title": "Addresses", "url": "/addresses"},
    {
        "key": "insurance",
        "title": "Insurance",
        "url": "#",
        "items": [
            {"key": "insurance-quotes", "title": "Get Quote", "url": "/insurance/quotes"},
            {"key": "insurance-certificates", "title": "Certificates", "url": "/insurance/certificates"},
        ],
    },
    {"key": "customers", "title": "Customers", "url": "/customers"},
    {"key": "roles", "title": "Roles", "url": "/roles"},
    {"key": "payment-config", "title": "Payment Config", "url": "/admin/payment-config"},
    {"key": "recharge-review", "title": "Recharge Review", "url": "/admin/recharge-review"},
    {"key": "top-up-history", "title": "Top-up History", "url": "/top-up-history"},
    {"key": "support", "title": "Support", "url": "/support"},
]

_CUSTOMER_PERMISSIONS = [
    Permission("dashboard", "Dashboard"),
    Permission("get-quote", "Get Quote"),
    Permission("orders", "Orders"),
    Permission("balance", "Balance"),
    Permission("saved-addresses", "Saved Addresses"),
    Permission("insurance", "Insurance"),
    Permission("insurance-quotes", "Get Quote", parent_key="insurance"),
    Permission("insurance-certificates", "Certificates", parent_key="insurance"),
    Permission("top-up-history", "Top-up History"),
    Permission("support", "Support"),
]

DEFAULT_ROLE_PERMISSIONS: dict[str, list[Permission]] = {
    SUPER_ADMIN_ROLE: _CUSTOMER_PERMISSIONS[:-1]
    + [
        Permission("customers", "Customers"),
        Permission("roles", "Roles"),
        Permission("payment-config", "Payment Config"),
        Permission("recharge-review", "Recharge Review"),
        Permission("support", "Support"),
    ],
    CUSTOMER_ROLE: list(_CUSTOMER_PERMISSIONS),
}

DEFAULT_ROLE_DESCRIPTIONS = {
    SUPER_ADMIN_ROLE: "Full access to every menu",
    CUSTOMER_ROLE: "Standard customer access",
}


def menu_keys() -> set[str]:
    keys: set[str] = set()
    for item in MENU_STRUCTURE:
        keys.add(item["key"])
        for child in item.get("items", []):
            keys.add(child["key"])
    return keys
