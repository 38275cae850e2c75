"""StarChain — single-node star registry on a hash-linked ledger.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
