"""
Disjointness obligations between object spaces

A new object space must not overlap any earlier space whose allocation is
still alive. Liveness comes from the session's allocation array, so freed
ranges may be reused by later allocations.
"""

import z3
from typing import Iterable, List


def no_overlap(base1: z3.ArithRef, len1: z3.ArithRef,
               base2: z3.ArithRef, len2: z3.ArithRef) -> z3.BoolRef:
    """[base1, base1 + len1) and [base2, base2 + len2) do not intersect"""
    return z3.Or(base1 + len1 <= base2, base2 + len2 <= base1)


class DisjointnessEncoder:
    """Emits non-overlap constraints for newly registered object spaces"""

    def __init__(self, encoder):
        """
        Args:
            encoder: Parent MemSpaceEncoder (assertion set and liveness context)
        """
        self.encoder = encoder
        # Pairs skipped because no liveness context was active
        self.skipped_pairs = 0

    def encode(self, base: z3.ArithRef, length: int, spaces: Iterable) -> List[z3.BoolRef]:
        """
        Assert that [base, base + length) is disjoint from every live space.

        Args:
            base: Base constant of the new space
            length: Length of the new space in fields
            spaces: Previously registered ObjectSpace records

        Returns:
            The constraints that were added to the assertion set
        """
        emitted = []
        len_term = z3.IntVal(length)
        base_name = base.decl().name()

        for space in spaces:
            if space.base_name == base_name:
                continue

            # No alloc array is active: the driver knows the allocation of the
            # current object in symex, so disjointness is not encoded.
            # NOTE: this is a soundness precondition on the driver, keep it.
            alloc_array = self.encoder.current_alloc_context
            if alloc_array is None:
                self.skipped_pairs += 1
                if self.encoder.verbose:
                    print(f"[memspace] no alloc context, skipping {base_name} vs {space.base_name}")
                continue

            alive = z3.Select(alloc_array, space.base)
            disj = z3.Implies(alive, no_overlap(base, len_term, space.base, space.length_term))
            self.encoder.assert_(disj)
            emitted.append(disj)

        return emitted
