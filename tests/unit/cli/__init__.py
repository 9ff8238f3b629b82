"""
Tests for CLI commands and interfaces.

This module contains unit tests for all CLI functionality including:
- Command execution and parameter handling
- Output formatting and display
- Configuration and client management
- Interactive features and menus
- Error handling and edge cases
"""