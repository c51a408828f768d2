"""Core type definitions for recordcopy."""

type Shared[T] = T
"""Type alias indicating a value is shared with the source, not duplicated.

When you see `Shared[T]` in a return type, the returned value is the very object
held by the source record. Mutating it mutates the source as well. Use
`clone_deep()` when an independent graph is needed.
"""
