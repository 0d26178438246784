"""Invoice Desk — validation and persistence pipeline for invoice form mutations.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
