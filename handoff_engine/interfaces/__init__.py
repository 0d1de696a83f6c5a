"""
Abstract interfaces for the handoff engine.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for the external collaborators (catalog, telemetry,
  workflow trigger, success-rate metrics, chain catalog, data storage)
- Repository interfaces for handoff history
- Service interfaces for matching and the public handoff operations
"""
