"""Core Layer — the ledger engine: records, linkage, sealing, ownership proofs.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - No IO: hashing, signatures and time arrive through core/protocols.py

Design Decisions:
    - Functional core separated from imperative shell
"""
