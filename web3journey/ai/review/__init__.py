"""AI code review with a raw-text fallback."""
