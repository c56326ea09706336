"""Team service."""

from typing import Any, Dict, Optional

from ..exceptions import NotFoundError
from ..operations import Operations
from .base import BaseService


class TeamService(BaseService):
    """Teams, including lookup by key."""

    async def get_team(self, team_id: str) -> Dict[str, Any]:
        data = await self._execute(Operations.teams.get_team(team_id), "get team")
        return self._entity(data, "team", "Team", team_id)

    async def get_teams(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._execute(Operations.teams.get_teams(first, after), "get teams")
        return data.get("teams") or {"nodes": []}

    async def get_team_by_key(self, key: str) -> Dict[str, Any]:
        data = await self._execute(Operations.teams.get_team_by_key(key), "get team by key")
        nodes = (data.get("teams") or {}).get("nodes") or []
        if not nodes:
            raise NotFoundError(f"Team not found: {key}")
        return nodes[0]

    async def create_team(self, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(Operations.teams.create_team(input_), "create team")
        return self._mutation_payload(data, "teamCreate", "create team")["team"]

    async def update_team(self, team_id: str, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(Operations.teams.update_team(team_id, input_), "update team")
        return self._mutation_payload(data, "teamUpdate", "update team")["team"]
