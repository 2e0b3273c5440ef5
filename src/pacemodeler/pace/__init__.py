"""
PACEModeler PACE Module

Knowledge states and the guarded transition system of the PACE handshake.

Components:
- state: Knowledge state (seven bags) and init()
- transition: Guarded rule machinery
- honest: Honest steps sdm1, sdm2, sdm3
- intruder: Forgery steps fkm11, fkm12, fkm21, fkm22, fkm31, fkm32
- rules: Rule registry
- properties: Attack targets and knowledge invariants
"""

from pacemodeler.pace.state import KnowledgeState, init
from pacemodeler.pace.transition import ParamKind, RuleFamily, TransitionRule
from pacemodeler.pace.honest import sdm1, sdm2, sdm3
from pacemodeler.pace.intruder import fkm11, fkm12, fkm21, fkm22, fkm31, fkm32
from pacemodeler.pace.rules import RULES, get_rule
from pacemodeler.pace.properties import (
    check_monotonicity_over_trace,
    forged_mac_accepted,
    honest_run_completed,
    intruder_knows_key,
    is_monotone_extension,
    session_key_compromised,
)

__all__ = [
    # State
    "KnowledgeState",
    "init",
    # Rule machinery
    "ParamKind",
    "RuleFamily",
    "TransitionRule",
    "RULES",
    "get_rule",
    # Honest steps
    "sdm1",
    "sdm2",
    "sdm3",
    # Intruder steps
    "fkm11",
    "fkm12",
    "fkm21",
    "fkm22",
    "fkm31",
    "fkm32",
    # Properties
    "intruder_knows_key",
    "session_key_compromised",
    "forged_mac_accepted",
    "honest_run_completed",
    "is_monotone_extension",
    "check_monotonicity_over_trace",
]
