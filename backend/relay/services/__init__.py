"""Services Layer — imperative shell around the pure relay core.

Invariants:
    - The only place an upstream call is awaited
    - Never raises to the route: every outcome becomes an HTTP response
"""
