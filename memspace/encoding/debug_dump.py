"""
Debug utilities for inspecting the encoded memory model
"""

import z3

from memspace.core.symbol import BASE_SUFFIX


def assertions_to_smt2(encoder) -> str:
    """
    SMT-LIB text of every assertion a session emitted.

    Identical sessions give identical text, which keeps counterexamples
    reproducible across runs.
    """
    solver = z3.Solver()
    solver.add(encoder.assertions)
    return solver.to_smt2()


def dump_assertions(encoder, filename="/tmp/memspace_dump.smt2"):
    """
    Dump a session's assertions to an SMT-LIB file for inspection.
    """
    with open(filename, "w") as f:
        f.write(assertions_to_smt2(encoder))
    if encoder.verbose:
        print(f"Dumped memory assertions to {filename}")


def analyze_dump(filename="/tmp/memspace_dump.smt2"):
    """
    Analyze a dumped SMT-LIB file.

    Returns dict with analysis results.
    """
    with open(filename, "r") as f:
        content = f.read()

    lines = content.split('\n')
    analysis = {
        'object_bases': sum(1 for line in lines
                            if line.startswith('(declare-fun') and BASE_SUFFIX in line),
        'assertions': sum(1 for line in lines if line.startswith('(assert')),
        'disjointness': content.count('(=>'),
        'alive_selects': content.count('(select'),
        'total_lines': len(lines)
    }

    return analysis
