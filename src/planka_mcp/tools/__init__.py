"""Importing this package registers every tool with the server."""

from planka_mcp.tools import cards, comments, labels, lists, memberships, projects, tasks

TOOL_NAMES = [
    "mcp_kanban_project_board_manager",
    "mcp_kanban_list_manager",
    "mcp_kanban_card_manager",
    "mcp_kanban_stopwatch",
    "mcp_kanban_label_manager",
    "mcp_kanban_task_manager",
    "mcp_kanban_comment_manager",
    "mcp_kanban_membership_manager",
]

__all__ = ["TOOL_NAMES", "cards", "comments", "labels", "lists", "memberships", "projects", "tasks"]
