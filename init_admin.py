"""
Seed the built-in roles and a default super admin for first login.
"""
import asyncio

from freightdesk.core.config import get_settings
from freightdesk.core.logging import configure_logging
from freightdesk.infrastructure.database.session import dispose_engine, get_session, init_db
from freightdesk.modules.accounts import USER_TYPE_ADMIN, AccountService, UserCreateInput
from freightdesk.modules.balances import BalanceService
from freightdesk.modules.roles import SUPER_ADMIN_ROLE, RoleService

ADMIN_EMAIL = "admin@freightdesk.local"
ADMIN_PASSWORD = "admin123"


async def create_default_admin():
    """Create the default roles and super admin account."""
    settings = get_settings()
    configure_logging(settings)
    await init_db()

    async for db in get_session():
        roles = RoleService.with_session(db)
        seeded = await roles.seed_defaults()
        print(f"Seeded roles: {', '.join(role.name for role in seeded)}")

        accounts = AccountService.with_session(db)
        if await accounts.get_supervisor() is not None:
            print("An admin account already exists, skipping admin creation")
            continue

        admin = await accounts.create_user(
            UserCreateInput(
                email=ADMIN_EMAIL,
                password=ADMIN_PASSWORD,
                full_name="System Administrator",
                user_type=USER_TYPE_ADMIN,
            )
        )
        await roles.assign_role_by_name(admin.id, SUPER_ADMIN_ROLE)
        await BalanceService.with_session(db).reset_balance(admin.id, settings.balances.admin_reset_cents)

        print("=" * 50)
        print("Default admin account created")
        print("=" * 50)
        print(f"Email: {ADMIN_EMAIL}")
        print(f"Password: {ADMIN_PASSWORD}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)

    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(create_default_admin())
