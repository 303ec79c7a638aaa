"""Task stack, spinner renderer and terminal primitives."""

__all__ = []
