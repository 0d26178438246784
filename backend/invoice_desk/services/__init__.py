"""Services Layer — the invoice mutation pipeline.

Invariants:
    - invoice_actions composes validator -> mutation_executor -> effect_dispatcher
    - Collaborators (statement executor, view effects) arrive by injection

Design Decisions:
    - One file per pipeline stage for locality
"""
