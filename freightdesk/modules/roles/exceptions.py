"""Role domain specific exceptions."""


class RoleError(Exception):
    """Base class for role errors."""


class RoleNotFoundError(RoleError):
    """Raised when a role id does not exist."""


class RoleAlreadyExistsError(RoleError):
    """Raised when a role name is taken."""


class SystemRoleError(RoleError):
    """Raised when attempting to delete a built-in role."""


class RoleValidationError(RoleError):
    """Raised when role input is incomplete."""
