"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure imports only errors and domain types from core/
    - All upstream failures mapped to UpstreamAPIError

Design Decisions:
    - Thin signed client over httpx: the relay owns its wire contract with SnapTrade
"""
