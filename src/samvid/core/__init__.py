"""Cross-cutting engine concerns: errors, logging and vocabulary."""
