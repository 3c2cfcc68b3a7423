"""Output formatting for command-line results."""
