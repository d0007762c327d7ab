"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces:
- Caching systems (in-memory, null)
"""
