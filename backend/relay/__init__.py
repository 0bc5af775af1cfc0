"""SnapTrade Relay Package — HTTP relay between a frontend and the SnapTrade API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
