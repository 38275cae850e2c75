"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with tags
    - Routes never contain business logic (delegate to the Ledger)
    - Handlers are plain def: the Ledger is synchronous and CPU-bound (hashing,
      secp256k1 recovery), so FastAPI runs them in its threadpool and the
      Ledger lock serializes concurrent appends
"""
