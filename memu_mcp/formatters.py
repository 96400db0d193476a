"""
Response Formatters

Turn MemU API payloads into the markdown-ish text blocks returned to the
calling agent. Each formatter takes the decoded JSON as-is; missing or null
fields are skipped rather than rendered.
"""

import json
from typing import Any, Dict, List

NO_MEMORIES_FOUND = "No related memories were found."
NO_CATEGORIES_YET = "No memory categories yet."

# Display-only labels for the remote task status. The service owns the state
# machine (PENDING -> PROCESSING -> SUCCESS/FAILED); unknown values pass through.
TASK_STATUS_LABELS = {
    "PENDING": "queued",
    "PROCESSING": "extracting memories",
    "SUCCESS": "memories stored",
    "FAILED": "memorization failed",
}


def _dump(result: Any) -> str:
    return json.dumps(result, ensure_ascii=False)


def _as_object(result: Any) -> Dict[str, Any]:
    """Non-object payloads (lists, strings, null) render like an empty object."""
    return result if isinstance(result, dict) else {}


def format_memorize(result: Any) -> str:
    """Acknowledge a memorize request with its task id and initial status."""
    if isinstance(result, dict) and result.get("task_id"):
        status = result.get("status") or "PENDING"
        return f"Memorization started (task_id: {result['task_id']}, status: {status})"
    return f"Result: {_dump(result)}"


def format_memorize_status(result: Any) -> str:
    """Status line, then start and completion times when the service reports them."""
    result = _as_object(result)
    status = result.get("status") or "UNKNOWN"
    label = TASK_STATUS_LABELS.get(status)
    parts = [f"Status: **{status}**" + (f" ({label})" if label else "")]

    if result.get("created_at"):
        parts.append(f"Started: {result['created_at']}")
    if result.get("completed_at"):
        parts.append(f"Completed: {result['completed_at']}")

    return "\n".join(parts)


def format_retrieve(result: Any) -> str:
    """
    Render a retrieve response.

    Section order is fixed: rewritten query, categories, memory items,
    resources. An empty response renders NO_MEMORIES_FOUND.
    """
    result = _as_object(result)
    parts: List[str] = []

    if result.get("rewritten_query"):
        parts.append(f"> Rewritten query: {result['rewritten_query']}")

    categories = result.get("categories") or []
    if categories:
        parts.append("## Categories")
        for cat in categories:
            parts.append(f"### {cat.get('name', '')}")
            if cat.get("description"):
                parts.append(cat["description"])
            if cat.get("summary"):
                parts.append(cat["summary"])

    items = result.get("items") or []
    if items:
        if parts:
            parts.append("")
        parts.append("## Memory items")
        for item in items:
            # v3 returns "content", older payloads "summary"
            text = item.get("content") or item.get("summary") or ""
            tag = f"[{item['memory_type']}] " if item.get("memory_type") else ""
            parts.append(f"- {tag}{text}")

    resources = result.get("resources") or []
    if resources:
        if parts:
            parts.append("")
        parts.append("## Resources")
        for res in resources:
            label = res.get("caption") or res.get("modality") or "resource"
            parts.append(f"- [{label}]({res.get('resource_url', '')}): {res.get('content') or ''}")

    if not parts:
        return NO_MEMORIES_FOUND
    return "\n".join(parts)


def format_categories(result: Any) -> str:
    """Bulleted category list, or NO_CATEGORIES_YET."""
    result = _as_object(result)
    categories = result.get("categories") or []
    if not categories:
        return NO_CATEGORIES_YET

    lines = ["## Memory categories"]
    for cat in categories:
        line = f"- **{cat.get('name', '')}**"
        if cat.get("description"):
            line += f": {cat['description']}"
        if cat.get("summary"):
            line += f"\n  {cat['summary']}"
        lines.append(line)
    return "\n".join(lines)


def format_delete(result: Any) -> str:
    if isinstance(result, str):
        return result
    return f"Deleted memories: {_dump(result)}"
