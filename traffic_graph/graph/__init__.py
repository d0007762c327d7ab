"""Graph store and the query components built on its snapshots.

- TrafficGraph: mutable weighted directed graph
- TrafficTraversal: shortest routes, reachability and weight aggregates
- VertexEncoder: zero-hot, one-hot and label encodings
"""

from .encoder import VertexEncoder
from .store import TrafficGraph
from .traversal import TrafficTraversal, WeightMode

__all__ = ["TrafficGraph", "TrafficTraversal", "VertexEncoder", "WeightMode"]
