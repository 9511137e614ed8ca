"""
User service: read-only access to the User aggregate.

Users are created out of band (seeding); the API only lists them and
resolves one by username.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound
from app.models import User


def _user_to_dict(user: User) -> dict:
    """Serialise a User ORM instance to a plain dict."""
    return {
        "username": user.username,
        "name": user.name,
        "avatar_url": user.avatar_url,
    }


async def get_users(db: AsyncSession) -> list[dict]:
    """Return all users ordered by username."""
    result = await db.execute(select(User).order_by(User.username))
    return [_user_to_dict(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, username: str) -> dict:
    """
    Return the user identified by *username*.

    Raises ``NotFound("username not found")`` when there is no such user.
    """
    result = await db.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFound("username not found")
    return _user_to_dict(user)
