"""Unit tests package for kube-tunnel MCP.

This package contains fast, fully-mocked unit tests for testing individual
components in isolation.

Test Categories:
- test_config.py: Environment-driven configuration
- test_tools.py: MCP tool definitions and schemas
"""
