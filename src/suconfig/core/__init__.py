"""
Core modules for suconfig.

- config: key registry, backends, property delegates and migration
- utils: logging and path helpers
"""
