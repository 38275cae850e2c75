"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Core Record objects are converted here, never returned raw by routes

Design Decisions:
    - Separate from core: schemas are API contracts, core/record.py is the domain entity
"""
