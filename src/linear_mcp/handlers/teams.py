"""Team and user tool handlers."""

from typing import Any, Dict

from ..services.teams import TeamService
from ..services.users import UserService
from ..tools.arguments import NoArguments
from .base import BaseHandler


class TeamHandler(BaseHandler):
    """Team listing."""

    def __init__(self, teams: TeamService):
        self.teams = teams

    async def get_teams(self, args: NoArguments) -> Dict[str, Any]:
        return await self.teams.get_teams()


class UserHandler(BaseHandler):
    """Lookup of the authenticated user."""

    def __init__(self, users: UserService):
        self.users = users

    async def get_user(self, args: NoArguments) -> Dict[str, Any]:
        """The user is whoever owns the configured credential."""
        return await self.users.get_viewer()
