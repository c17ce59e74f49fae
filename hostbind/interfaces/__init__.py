"""
Interfaces package: protocols implemented by subsystems and exposed function bodies.
"""

from .protocols import NativeCallable, Subsystem

__all__ = ["NativeCallable", "Subsystem"]
