"""
Repository implementations for data access.

This package contains the agent and chain catalogs, success-rate
providers and the handoff event store.
"""

from handoff_engine.repositories.agent import *
from handoff_engine.repositories.chains import *
from handoff_engine.repositories.metrics import *
from handoff_engine.repositories.handoff import *
