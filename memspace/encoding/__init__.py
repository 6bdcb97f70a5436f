"""
Z3 SMT encoding for the memory layer.

This module handles the translation of object spaces and pointer values
into Z3 sorts, terms and assertions.
"""

from memspace.encoding.encoder import MemSpaceEncoder
