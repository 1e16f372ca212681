"""
canvas-tui: terminal viewer for upcoming Canvas assignments.

Fetches the authenticated user's planner items from the Canvas REST API,
buckets them by due date and lets the user page through the days with
vim-style keys.

Components:
- config: Credential loading (CANVAS_URL, CANVAS_ACCESS_TOKEN)
- canvas: HTTP client and wire models for the planner endpoint
- core: Day-bucketed assignment index and view state
- tui: Full-screen renderer, event loop and browser hand-off
- cli: Typer entry point
"""

__version__ = "0.1.0"
