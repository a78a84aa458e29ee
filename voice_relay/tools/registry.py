"""
Explicit registry of tools Gemini may call during a session.

Tools are registered in code: the built-in set first, then an optional
extension pass that imports each module named in TOOL_MODULES and calls its
``register(registry)`` function.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from google.genai import types

from voice_relay.config.constants import LOGGER_NAME, TOOL_FAILED_RESULT, UNKNOWN_TOOL_RESULT
from voice_relay.config.settings import Settings
from voice_relay.exceptions import ToolExecutionError
from voice_relay.models.transcript import Transcript

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class ToolContext:
    """What a tool handler may see of the calling session."""

    session_id: str
    transcript: Transcript
    settings: Settings


ToolHandler = Callable[[str, Dict[str, Any], ToolContext], Awaitable[str]]


@dataclass
class Tool:
    name: str
    description: str
    handler: ToolHandler
    parameters: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def declaration(self) -> types.FunctionDeclaration:
        return types.FunctionDeclaration(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )


class ToolRegistry:
    """Maps tool names to handlers and builds the catalog sent to Gemini."""

    def __init__(self):
        self._tools: Dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            logger.warning(f"Tool {tool.name} registered twice, keeping the latest")
        self._tools[tool.name] = tool

    def resolve(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def declarations(self) -> List[types.Tool]:
        """Tool catalog for LiveConnectConfig.tools (empty when nothing is registered)."""
        if not self._tools:
            return []
        return [
            types.Tool(
                function_declarations=[tool.declaration() for tool in self._tools.values()]
            )
        ]

    async def call(self, tool: Tool, args: Dict[str, Any], context: ToolContext) -> str:
        """
        Run one tool handler and return its result as text.

        Raises:
            ToolExecutionError: If the handler raises.
        """
        try:
            result = await tool.handler(context.session_id, args or {}, context)
        except Exception as e:
            raise ToolExecutionError(tool.name, str(e)) from e
        return result if isinstance(result, str) else str(result)

    async def execute(self, name: str, args: Dict[str, Any], context: ToolContext) -> str:
        """
        Run a tool and return its result text.

        Unknown tools and failing handlers produce an apology string instead of an
        error, so every tool call always gets a response.
        """
        tool = self.resolve(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name}")
            return UNKNOWN_TOOL_RESULT

        try:
            return await self.call(tool, args, context)
        except ToolExecutionError as e:
            logger.error(f"Tool execution failed: {e}", exc_info=True)
            return TOOL_FAILED_RESULT

    def __len__(self) -> int:
        return len(self._tools)
