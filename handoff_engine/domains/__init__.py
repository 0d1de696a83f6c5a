"""
Domain models for the handoff engine.

This package contains the value types exchanged between the engine's
services and its callers.
"""

from handoff_engine.domains.enums import *
from handoff_engine.domains.errors import *
from handoff_engine.domains.agents import *
from handoff_engine.domains.payloads import *
from handoff_engine.domains.handoff import *
