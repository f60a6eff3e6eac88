"""
Soft-filter relaxation for the pool re-use path.

Responsibilities:
- Detect hard constraints (kosher, meat/dairy separation) that must never be
  relaxed automatically.
- Loosen soft filters one step at a time when too few candidates remain.
- Report every relaxation step and every refused relaxation for the caller.
"""
