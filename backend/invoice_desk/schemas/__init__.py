"""Pydantic Schemas — response shapes for API endpoints.

Invariants:
    - Schemas describe what leaves the system boundary
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
