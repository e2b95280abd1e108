"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems:
- Network storage (tab-separated stop and line files)
- Routing and structural analysis on the in-memory graph
"""
