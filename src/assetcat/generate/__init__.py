from .accessors import (
    AccessLevel,
    AccessorNode,
    AccessorTreeGenerator,
    LeafAccessor,
)

__all__ = ["AccessLevel", "AccessorNode", "AccessorTreeGenerator", "LeafAccessor"]
