"""Service wiring for command and webhook orchestration."""
