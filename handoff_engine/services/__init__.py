"""
Service implementations for the handoff engine.

These services implement the matching, scoring, ranking, chain matching
and execution logic behind the interfaces in handoff_engine.interfaces.
"""

from handoff_engine.services.capability import *
from handoff_engine.services.scoring import *
from handoff_engine.services.ranking import *
from handoff_engine.services.chains import *
from handoff_engine.services.executor import *
from handoff_engine.services.handoff import *
