from __future__ import annotations


def format_chat_history(history: list | None = None) -> str:
    """Render ChatInput.history items as role-labelled lines, oldest first."""
    lines = []
    for h in history or []:
        role = h.role if hasattr(h, "role") else h.get("role")
        content = h.content if hasattr(h, "content") else h.get("content")
        lines.append(f"{role}: {content}")
    return "\n".join(lines)
