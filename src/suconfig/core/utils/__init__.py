"""
Utils module for suconfig core functionality.

This module contains logging utilities and data directory management.
"""
