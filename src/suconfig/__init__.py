"""
suconfig - Typed configuration core for a root-access manager.

This package multiplexes two persistence backends behind a single typed
property surface and reconciles legacy settings on startup.

Package Structure:
- core/config/: key registry, backends, property delegates, migration
- core/utils/: logging and data directory helpers
- database/: SQL-backed structured settings store
- cli/: command-line inspection and editing of stored settings
"""

__version__ = "0.3"
