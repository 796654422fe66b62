"""Cross-cutting configuration, logging and clock helpers."""
