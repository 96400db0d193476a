"""
MemU MCP Tools

Registry of the five memu_* tools. Each tool is a name, a description for the
calling agent, a pydantic input model and an async handler. dispatch()
validates arguments before the handler runs, so schema failures never reach
the network.

Tools:
- memu_memorize: save a conversation (async on the service side, returns task_id)
- memu_memorize_status: poll a memorize task
- memu_retrieve: semantic search (text or conversation query)
- memu_categories: list memory categories with summaries
- memu_delete: delete memories (destructive)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp import types
from pydantic import ValidationError as PydanticValidationError

from memu_mcp.client import (
    CATEGORIES_PATH,
    DELETE_PATH,
    MEMORIZE_PATH,
    RETRIEVE_PATH,
    MemuClient,
    memorize_status_path,
)
from memu_mcp.errors import SchemaValidationError, UnknownToolError
from memu_mcp.formatters import (
    format_categories,
    format_delete,
    format_memorize,
    format_memorize_status,
    format_retrieve,
)
from memu_mcp.models import (
    CategoriesInput,
    DeleteInput,
    MemorizeInput,
    MemorizeStatusInput,
    RetrieveInput,
    ToolInput,
    serialize_message,
    serialize_query,
)

logger = logging.getLogger(__name__)

Handler = Callable[[MemuClient, Any], Awaitable[str]]


@dataclass
class ToolSpec:
    """A registered tool."""

    name: str
    description: str
    input_model: Type[ToolInput]
    handler: Handler
    annotations: Optional[types.ToolAnnotations] = None

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(),
            annotations=self.annotations,
        )


@dataclass
class ToolRegistry:
    """Named tools in registration order, bound to one MemuClient."""

    client: MemuClient
    _tools: Dict[str, ToolSpec] = field(default_factory=dict)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)
        return spec

    def list_tools(self) -> List[types.Tool]:
        return [spec.to_mcp_tool() for spec in self._tools.values()]

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        """
        Validate arguments and run the named tool.

        Raises:
            UnknownToolError: no such tool
            SchemaValidationError: arguments rejected by the input model
            MemuError: anything the handler or client raises
        """
        spec = self.get(name)

        try:
            params = spec.input_model.model_validate(arguments or {})
        except PydanticValidationError as e:
            raise SchemaValidationError(name, _summarize_errors(e)) from e

        text = await spec.handler(self.client, params)
        return [types.TextContent(type="text", text=text)]


def _summarize_errors(error: PydanticValidationError) -> str:
    """One line per pydantic error: 'loc: msg'."""
    lines = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        lines.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(lines)


def _now_iso() -> str:
    """Current UTC time, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================================
# Handlers
# ============================================================================

async def memorize(client: MemuClient, params: MemorizeInput) -> str:
    body = {
        "conversation": [serialize_message(m) for m in params.conversation],
        "user_id": client.user_id(),
        "agent_id": client.agent_id,
        "agent_name": client.agent_name,
        "session_date": params.session_date or _now_iso(),
    }
    result = await client.call(MEMORIZE_PATH, body=body)

    task_id = result.get("task_id") if isinstance(result, dict) else None
    logger.info(f"Memorize submitted ({len(params.conversation)} messages, task_id={task_id})")
    return format_memorize(result)


async def memorize_status(client: MemuClient, params: MemorizeStatusInput) -> str:
    result = await client.call(memorize_status_path(params.task_id), method="GET")
    return format_memorize_status(result)


async def retrieve(client: MemuClient, params: RetrieveInput) -> str:
    body = {
        "user_id": client.user_id(),
        "agent_id": client.agent_id,
        "query": serialize_query(params.query),
    }
    result = await client.call(RETRIEVE_PATH, body=body)
    return format_retrieve(result)


async def categories(client: MemuClient, params: CategoriesInput) -> str:
    body = {
        "user_id": client.user_id(),
        "agent_id": client.agent_id,
    }
    result = await client.call(CATEGORIES_PATH, body=body)
    return format_categories(result)


async def delete(client: MemuClient, params: DeleteInput) -> str:
    body: Dict[str, Any] = {"user_id": client.user_id()}
    if params.agent_id:
        body["agent_id"] = params.agent_id

    logger.warning(f"Deleting memories for agent_id={params.agent_id or '<all agents>'}")
    result = await client.call(DELETE_PATH, body=body)
    return format_delete(result)


# ============================================================================
# Registration
# ============================================================================

def build_registry(client: MemuClient) -> ToolRegistry:
    """Registry with all five memu tools."""
    registry = ToolRegistry(client=client)

    registry.register(ToolSpec(
        name="memu_memorize",
        description="""Save a conversation as long-term memory.

MemU extracts the important information (who the user is, preferences, experiences, project history) from the conversation and stores it.
Pass at least 3 messages in dialogue order.

Memorization runs asynchronously: this returns a task_id right away. Use memu_memorize_status to follow it.""",
        input_model=MemorizeInput,
        handler=memorize,
        annotations=types.ToolAnnotations(
            title="Memorize Conversation",
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=False,
            openWorldHint=True,
        ),
    ))

    registry.register(ToolSpec(
        name="memu_memorize_status",
        description="Check the progress of a memorize task. Status moves PENDING -> PROCESSING -> SUCCESS/FAILED. Safe to call repeatedly.",
        input_model=MemorizeStatusInput,
        handler=memorize_status,
        annotations=types.ToolAnnotations(
            title="Memorize Task Status",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ))

    registry.register(ToolSpec(
        name="memu_retrieve",
        description="""Semantic search over past memories about the user.

query can be plain text or an array of conversation messages.
With a conversation array the query is rewritten automatically, which gives more precise results.""",
        input_model=RetrieveInput,
        handler=retrieve,
        annotations=types.ToolAnnotations(
            title="Retrieve Memories",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ))

    registry.register(ToolSpec(
        name="memu_categories",
        description="List the stored memory categories. Each category includes a summary, giving an overview of everything remembered so far.",
        input_model=CategoriesInput,
        handler=categories,
        annotations=types.ToolAnnotations(
            title="Memory Categories",
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ))

    registry.register(ToolSpec(
        name="memu_delete",
        description="""Delete the user's memories.

With agent_id only that agent's memories are deleted. WITHOUT agent_id ALL of the user's memories are deleted.

⚠️ Destructive and irreversible: ALWAYS get explicit confirmation from the user before calling this.""",
        input_model=DeleteInput,
        handler=delete,
        annotations=types.ToolAnnotations(
            title="Delete Memories",
            readOnlyHint=False,
            destructiveHint=True,
            idempotentHint=True,
            openWorldHint=True,
        ),
    ))

    return registry
