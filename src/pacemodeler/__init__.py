"""
PACEModeler - Symbolic Model Checking for the PACE Handshake

This package models Password Authenticated Connection Establishment between
a chip and a terminal, together with an active network intruder, and
searches the reachable knowledge states for attacks.

Components:
- Term algebra with Diffie-Hellman key symmetry
- Append-only knowledge bags
- Guarded honest and intruder transition rules
- Bounded reachability search with replayable witnesses

Example Usage:
    from pacemodeler import (
        ReachabilitySearch, SearchConfig, Universe, init, session_key_compromised,
    )

    search = ReachabilitySearch(SearchConfig(max_depth=5), Universe.build())
    result = search.run(init(), session_key_compromised)
    print(result.describe())
    if result.found:
        print(result.witness.trace.export_json())
"""

from pacemodeler.core.types import INTRUDER, DomainParameter, Principal, Random
from pacemodeler.pace.state import KnowledgeState, init
from pacemodeler.pace.properties import (
    forged_mac_accepted,
    honest_run_completed,
    intruder_knows_key,
    session_key_compromised,
)
from pacemodeler.search.config import SearchConfig, SearchStrategy, Universe
from pacemodeler.search.driver import ReachabilitySearch, SearchOutcome, SearchResult

__version__ = "0.1.0"

__all__ = [
    # Terms
    "INTRUDER",
    "Principal",
    "Random",
    "DomainParameter",
    # State
    "KnowledgeState",
    "init",
    # Targets
    "intruder_knows_key",
    "session_key_compromised",
    "forged_mac_accepted",
    "honest_run_completed",
    # Search
    "ReachabilitySearch",
    "SearchConfig",
    "SearchStrategy",
    "SearchOutcome",
    "SearchResult",
    "Universe",
    # Metadata
    "__version__",
]
