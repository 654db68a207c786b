"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from vidnest.domain.model.user import User
from vidnest.domain.value import UserId


class UserRepository(ABC):
    """Read access to users, owned by the account service."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
