"""
User service: password hashing in front of the gateway's user writes.

The gateway stores whatever password_hash it is given and never returns it;
turning a plaintext password into that hash is the caller's job.
"""

import bcrypt

from ..database import ContentGateway, DBUser

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash (e.g. legacy plaintext rows)
        return False


def _with_hash(fields: dict) -> dict:
    fields = dict(fields)
    password = fields.pop("password", None)
    if password:
        fields["password_hash"] = hash_password(password)
    return fields


class UserService:
    """Service for admin user management."""

    def __init__(self, gateway: ContentGateway):
        self.gateway = gateway

    async def list_users(self) -> list[DBUser]:
        return await self.gateway.get_all_users()

    async def create_user(self, fields: dict) -> DBUser:
        """Create a user, hashing the plaintext password. Raises BackendError on failure."""
        if not fields.get("password"):
            raise ValueError("Password is required")
        return await self.gateway.add_user(_with_hash(fields))

    async def update_user(self, user_id: str, fields: dict) -> DBUser | None:
        """Update a user; an empty password leaves the stored hash unchanged."""
        return await self.gateway.update_user(user_id, _with_hash(fields))

    async def delete_user(self, user_id: str) -> bool:
        return await self.gateway.delete_user(user_id)
