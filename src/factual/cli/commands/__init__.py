"""Top-level factual commands (one module per command)."""
