"""Roles and menu permissions."""

from .defaults import CUSTOMER_ROLE, MENU_STRUCTURE, SUPER_ADMIN_ROLE, SYSTEM_ROLES
from .exceptions import (
    RoleAlreadyExistsError,
    RoleError,
    RoleNotFoundError,
    RoleValidationError,
    SystemRoleError,
)
from .models import Permission, Role, RoleInput, UserAccess
from .service import RoleService

__all__ = [
    "CUSTOMER_ROLE",
    "MENU_STRUCTURE",
    "Permission",
    "Role",
    "RoleAlreadyExistsError",
    "RoleError",
    "RoleInput",
    "RoleNotFoundError",
    "RoleService",
    "RoleValidationError",
    "SUPER_ADMIN_ROLE",
    "SYSTEM_ROLES",
    "SystemRoleError",
    "UserAccess",
]
