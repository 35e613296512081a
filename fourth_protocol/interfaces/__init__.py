"""
fourth_protocol.interfaces - User interfaces for The Fourth Protocol

This package contains the terminal interface for playing, analysing
positions and benchmarking the engine.
"""

# Don't import anything here to avoid circular imports
__all__ = []
