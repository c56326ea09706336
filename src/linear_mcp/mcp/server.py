"""MCP server exposing the Linear tool table over stdio."""

import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from ..auth import create_auth_provider
from ..auth.base import AuthProvider
from ..config import Settings, get_settings
from ..graphql.client import GraphQLClient
from ..graphql.http_client import configure_http_client
from ..graphql.rate_limit import FixedWindowRateLimiter
from ..handlers import (
    AuthHandler,
    CommentHandler,
    IssueHandler,
    ProjectHandler,
    TeamHandler,
    UserHandler,
)
from ..services import (
    CommentService,
    IssueService,
    ProjectService,
    TeamService,
    UserService,
)
from ..tools.dispatch import ToolDispatcher, ToolResponse
from ..tools.registry import build_bindings
from ..tools.schemas import ToolDescriptor, build_tool_table

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised inside the MCP call_tool handler so the SDK marks the result isError."""


def build_handlers(client: GraphQLClient, auth: AuthProvider, bulk_concurrency: int) -> Dict[str, Any]:
    issues = IssueService(client, bulk_concurrency)
    return {
        "auth": AuthHandler(auth),
        "issues": IssueHandler(issues),
        "projects": ProjectHandler(ProjectService(client, issues, bulk_concurrency)),
        "teams": TeamHandler(TeamService(client, bulk_concurrency)),
        "users": UserHandler(UserService(client, bulk_concurrency)),
        "comments": CommentHandler(CommentService(client, bulk_concurrency)),
    }


class LinearMCPServer:
    """Wraps the low-level MCP Server around a ToolDispatcher."""

    def __init__(
        self,
        descriptors: List[ToolDescriptor],
        dispatcher: ToolDispatcher,
        name: str = "linear-mcp",
    ):
        self.descriptors = descriptors
        self.dispatcher = dispatcher
        self.server = Server(name)
        self._setup_handlers()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LinearMCPServer":
        """Wire auth, client, services and handlers from configuration.

        Raises ConfigurationError when no credentials are configured.
        """
        settings = settings or get_settings()
        configure_http_client(settings.http_timeout)
        auth = create_auth_provider(settings)

        rate_limiter = None
        if settings.http_rate_limit_max_requests:
            rate_limiter = FixedWindowRateLimiter(
                settings.http_rate_limit_max_requests,
                settings.rate_limit_window,
            )
        client = GraphQLClient(
            auth,
            endpoint=settings.linear_api_url,
            max_retries=settings.http_max_retries,
            rate_limiter=rate_limiter,
        )

        descriptors = build_tool_table(settings.tool_prefix)
        bindings = build_bindings(
            descriptors, build_handlers(client, auth, settings.bulk_concurrency)
        )
        logger.info(
            "Registered %d tools (prefix=%s, auth=%s)",
            len(descriptors), settings.tool_prefix, auth.auth_type,
        )
        return cls(descriptors, ToolDispatcher(descriptors, bindings, auth))

    def _setup_handlers(self):
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return await self.list_tools()

        # Arguments are validated by the dispatcher, which reports failures as
        # tool errors instead of protocol errors.
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(
            name: str, arguments: Optional[Dict[str, Any]] = None
        ) -> List[types.TextContent]:
            response = await self.call_tool(name, arguments)
            if response.is_error:
                raise ToolCallError(response.text)
            return response.to_text_content()

    async def list_tools(self) -> List[types.Tool]:
        return [d.to_mcp_tool() for d in self.descriptors]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        return await self.dispatcher.dispatch(name, arguments or {})

    async def run_stdio(self):
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
