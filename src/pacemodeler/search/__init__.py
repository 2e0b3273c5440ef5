"""
PACEModeler Search Module

Bounded reachability search over knowledge states.

Components:
- config: Parameter universe and search bounds
- driver: Reachability search and its results
- trace: Replayable witness traces
"""

from pacemodeler.search.config import SearchConfig, SearchStrategy, Universe
from pacemodeler.search.driver import (
    ReachabilitySearch,
    SearchOutcome,
    SearchResult,
    Witness,
)
from pacemodeler.search.trace import Step, Trace

__all__ = [
    "SearchConfig",
    "SearchStrategy",
    "Universe",
    "ReachabilitySearch",
    "SearchOutcome",
    "SearchResult",
    "Witness",
    "Step",
    "Trace",
]
