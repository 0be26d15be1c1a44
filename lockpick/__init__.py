"""Boolean logic graphs: construction, traversal, sorting and host-side inference."""

__version__ = "0.1.0"

__all__ = [
    "bitset",
    "compute",
    "dlist",
    "errors",
    "graph",
    "inference",
    "properties",
    "traverse",
    "traverse_sync",
    "tsort",
]