"""
Requery decision engine.

Responsibilities:
- Compare the previous and the new search context of a conversation turn.
- Classify changes as hard (refetch from the places provider) or soft
  (re-filter the retained candidate pool locally).
- Detect when the retained pool is too small to serve the request.
- Return a single decision with an auditable changeset.
"""
