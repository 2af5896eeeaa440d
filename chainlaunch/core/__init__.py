"""Core Layer: pure domain logic and boundary contracts, no IO, no subprocesses.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic; the clock is an input
    - Async appears only in repository_protocols (contracts the shell implements)

Design Decisions:
    - Functional core separated from imperative shell (services/ orchestrates the IO)
"""
