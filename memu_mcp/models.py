"""
Tool Input Models

Pydantic models for the arguments of each MCP tool. The JSON schemas
advertised to the host are generated from these, and the dispatcher
validates incoming arguments against them before any handler runs.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ConversationMessage(BaseModel):
    """One turn of a conversation, in dialogue order."""
    model_config = ConfigDict(extra='ignore')

    role: Literal["user", "assistant"] = Field(..., description="Speaker role")
    content: str = Field(..., description="Message content")
    name: Optional[str] = Field(None, description="Display name")
    created_at: Optional[str] = Field(None, description="ISO 8601 timestamp")


class ToolInput(BaseModel):
    """Base for tool argument models."""
    model_config = ConfigDict(extra='forbid')


class MemorizeInput(ToolInput):
    """Input for saving a conversation as long-term memory."""

    conversation: List[ConversationMessage] = Field(
        ...,
        description=(
            "Conversation messages (at least 3). Example: "
            "[{role:'user',content:'...'},{role:'assistant',content:'...'},{role:'user',content:'...'}]"
        ),
        min_length=3,
    )
    session_date: Optional[str] = Field(
        None,
        description="Session date (ISO 8601). Defaults to the current time",
    )


class MemorizeStatusInput(ToolInput):
    """Input for checking a memorize task."""

    task_id: str = Field(..., description="task_id returned by memu_memorize", min_length=1)


class RetrieveInput(ToolInput):
    """Input for semantic memory search."""

    query: Union[str, List[ConversationMessage]] = Field(
        ...,
        description=(
            "Search query: plain text, or an array of conversation messages "
            "(the service rewrites it into a search query)"
        ),
    )


class CategoriesInput(ToolInput):
    """memu_categories takes no arguments."""


class DeleteInput(ToolInput):
    """Input for deleting memories."""

    agent_id: Optional[str] = Field(
        None,
        description="Agent whose memories should be deleted. Omit to delete ALL of the user's memories",
    )


def serialize_message(message: ConversationMessage) -> Dict[str, Any]:
    """Wire form of a message; unset optional fields are left out."""
    return message.model_dump(exclude_none=True)


def serialize_query(query: Union[str, List[ConversationMessage]]) -> Union[str, List[Dict[str, Any]]]:
    """Text queries go out as-is, conversation queries as a list of messages."""
    if isinstance(query, str):
        return query
    return [serialize_message(m) for m in query]
