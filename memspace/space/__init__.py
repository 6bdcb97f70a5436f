"""
Object spaces: address ranges of symbolic objects.

- Registry assigning each object a positive base and a flattened length
- Disjointness obligations between live spaces
"""

from memspace.space.registry import ObjectSpace, ObjectSpaceRegistry
from memspace.space._disjointness import DisjointnessEncoder, no_overlap
