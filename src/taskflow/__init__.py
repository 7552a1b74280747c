"""Taskflow - project and task store with REST and MCP front ends."""

__version__ = "1.0.0"
