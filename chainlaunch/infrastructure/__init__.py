"""Infrastructure Layer: default implementations of the boundary protocols.

Invariants:
    - Infrastructure never imports from services/
    - Every failure mapped to a ChainLaunchError subclass at the boundary

Design Decisions:
    - Only the collaborators with a natural local default live here (clock, events,
      filesystem, HTTP genesis fetch); signing, broadcasting and the chain binary
      are supplied by the caller
"""
