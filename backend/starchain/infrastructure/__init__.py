"""Infrastructure Layer — concrete collaborators for the ledger core.

Invariants:
    - Implements the Protocols in core/protocols.py; core never imports from here
    - Only module allowed to touch hashlib, ecdsa and the wall clock
"""
