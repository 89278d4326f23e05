"""Cross-cutting infrastructure: settings, logging and version."""
