"""
Test suite for the game engine.

Focus areas:
- Reducer purity and invariants
- Pipe collision/pass bookkeeping
- Event ordering and the fold
- Replay determinism
- Hash chain integrity
"""
