"""Tool dispatch: the single conversion point from exceptions to responses."""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pydantic
from mcp import types

from ..auth.base import AuthProvider
from ..exceptions import (
    LinearError,
    UnauthenticatedError,
    UnknownToolError,
    ValidationError,
    to_linear_error,
)
from ..observability.logging import clear_log_context, set_log_context
from .registry import HandlerBinding
from .schemas import ToolDescriptor

logger = logging.getLogger(__name__)


@dataclass
class ToolResponse:
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    @classmethod
    def from_result(cls, result: Any) -> "ToolResponse":
        if isinstance(result, str):
            return cls.from_text(result)
        return cls.from_text(json.dumps(result, indent=2, default=str))

    @property
    def text(self) -> str:
        return "\n".join(item["text"] for item in self.content)

    def to_text_content(self) -> List[types.TextContent]:
        return [types.TextContent(type="text", text=item["text"]) for item in self.content]


def format_validation_error(exc: pydantic.ValidationError) -> str:
    """Describe the first failing field, e.g. ``issues.1.teamId: Field required``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


class ToolDispatcher:
    """Routes a tool call to its bound handler method."""

    def __init__(
        self,
        descriptors: Sequence[ToolDescriptor],
        bindings: Mapping[str, HandlerBinding],
        auth: AuthProvider,
    ):
        self.descriptors = {d.name: d for d in descriptors}
        self.bindings = dict(bindings)
        self.auth = auth

    async def dispatch(
        self,
        tool_name: str,
        raw_args: Optional[Dict[str, Any]] = None,
    ) -> ToolResponse:
        """Run one tool call. Never raises; failures come back as error responses."""
        set_log_context(tool_name=tool_name, request_id=uuid.uuid4().hex[:12])
        binding = self.bindings.get(tool_name)
        start = time.perf_counter()
        try:
            if binding is None:
                raise UnknownToolError(f"Unknown tool: {tool_name}")

            logger.info("Tool call: %s (%s.%s)", tool_name,
                        type(binding.handler).__name__, binding.method_name)
            result = await self._invoke(binding, raw_args or {})
            logger.debug("Tool %s finished in %.3fs", tool_name, time.perf_counter() - start)
            return ToolResponse.from_result(result)
        except UnknownToolError as e:
            logger.warning("%s", e)
            return ToolResponse.from_text(str(e), is_error=True)
        except Exception as e:
            error = to_linear_error(e)
            if isinstance(e, LinearError):
                logger.error("Tool execution failed: %s - [%s] %s", tool_name, error.code, error)
            else:
                logger.exception("Tool execution failed: %s - unexpected error", tool_name)
            return ToolResponse.from_text(f"Failed to {binding.action}: {error}", is_error=True)
        finally:
            clear_log_context()

    async def _invoke(self, binding: HandlerBinding, args: Dict[str, Any]) -> Any:
        if binding.requires_auth and not self.auth.is_authenticated():
            raise UnauthenticatedError(
                "Not authenticated with Linear. Call linear_auth and complete the OAuth flow."
            )

        descriptor = self.descriptors.get(binding.tool_name)
        if descriptor is not None:
            for key in descriptor.required:
                if args.get(key) is None:
                    raise ValidationError(f"Missing required parameter: {key}")

        try:
            parsed = binding.arguments_model.model_validate(args)
        except pydantic.ValidationError as e:
            raise ValidationError(format_validation_error(e)) from e

        method = getattr(binding.handler, binding.method_name)
        return await method(parsed)
