"""Command-line interface for inspecting and editing stored settings."""
