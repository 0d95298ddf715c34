"""User-facing entry points for annotext."""
