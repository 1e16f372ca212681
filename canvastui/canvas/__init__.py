"""Canvas API access: wire models (models) and the planner client (client)."""
