"""User service."""

from typing import Any, Dict, Optional

from ..operations import Operations
from .base import BaseService


class UserService(BaseService):
    """Users and the viewer (owner of the credential)."""

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        data = await self._execute(Operations.users.get_user(user_id), "get user")
        return self._entity(data, "user", "User", user_id)

    async def get_users(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._execute(Operations.users.get_users(first, after), "list users")
        return data.get("users") or {"nodes": []}

    async def get_viewer(self) -> Dict[str, Any]:
        data = await self._execute(Operations.users.get_viewer(), "get current user")
        return self._entity(data, "viewer", "Viewer", "me")
