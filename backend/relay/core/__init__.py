"""Core Layer — pure relay logic, no IO, no async, no HTTP framework.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validation, error
      normalization and response mapping are testable without a server
"""
