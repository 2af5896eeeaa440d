"""Services Layer: the launch coordinator and the genesis bootstrapper.

Invariants:
    - Services orchestrate IO around pure core functions
    - Every external call goes through run_step (typed errors, optional deadline)

Design Decisions:
    - One class per component; shared step plumbing in flow_helpers.py
"""
