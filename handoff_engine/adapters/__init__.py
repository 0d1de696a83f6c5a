"""
Adapters connecting the handoff engine to external systems.
"""
