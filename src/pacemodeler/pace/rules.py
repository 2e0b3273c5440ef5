"""
PACEModeler Rule Registry

Name lookup over every honest and intruder transition rule.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

import structlog

from pacemodeler.core.exceptions import UnknownRuleError
from pacemodeler.pace.honest import HONEST_RULES
from pacemodeler.pace.intruder import INTRUDER_RULES
from pacemodeler.pace.transition import TransitionRule

logger = structlog.get_logger()


ALL_RULES: Tuple[TransitionRule, ...] = HONEST_RULES + INTRUDER_RULES

RULES: Dict[str, TransitionRule] = {rule.name: rule for rule in ALL_RULES}


def get_rule(name: str) -> TransitionRule:
    """
    Look up a rule by name.

    Raises:
        UnknownRuleError: If no rule has this name
    """
    try:
        return RULES[name]
    except KeyError:
        logger.warning("unknown_rule", rule=name, known=sorted(RULES))
        raise UnknownRuleError(name) from None


def select_rules(names: Iterable[str]) -> Tuple[TransitionRule, ...]:
    """Resolve rule names, preserving order and dropping repeats."""
    selected: Dict[str, TransitionRule] = {}
    for name in names:
        selected.setdefault(name, get_rule(name))
    return tuple(selected.values())
