"""Domain models for roles and menu permissions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Permission:
    menu_key: str
    menu_title: str
    parent_key: Optional[str] = None
    can_view: bool = True


@dataclass(slots=True)
class Role:
    id: str
    name: str
    description: Optional[str] = None
    permissions: list[Permission] = field(default_factory=list)
    user_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class RoleInput:
    name: str
    description: Optional[str] = None
    permissions: list[Permission] = field(default_factory=list)


@dataclass(slots=True)
class UserAccess:
    """Menu access resolved across every role a user holds."""

    user_type: str
    roles: list[str]
    permissions: list[str]
