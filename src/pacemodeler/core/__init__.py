"""
PACEModeler Core Module

Provides the term algebra and containers every other module builds on.

Components:
- types: Symbolic terms (Principal, Random, Expo, Hash, Message1, ...)
- bag: Immutable, append-only multiset
- exceptions: Custom exception types
"""

from pacemodeler.core.types import (
    INTRUDER,
    Cipher1,
    Cipher3,
    DomainParameter,
    Expo,
    Hash,
    MapPoint,
    Message,
    Message1,
    Message2,
    Message3,
    Principal,
    Random,
    shared_key,
    terms_equal,
)
from pacemodeler.core.bag import Bag
from pacemodeler.core.exceptions import (
    PACEModelerError,
    InvariantViolation,
    UnknownRuleError,
    WitnessNotFound,
)

__all__ = [
    # Terms
    "INTRUDER",
    "Principal",
    "Random",
    "DomainParameter",
    "MapPoint",
    "Expo",
    "Hash",
    "Cipher1",
    "Cipher3",
    "Message",
    "Message1",
    "Message2",
    "Message3",
    "shared_key",
    "terms_equal",
    # Containers
    "Bag",
    # Exceptions
    "PACEModelerError",
    "InvariantViolation",
    "UnknownRuleError",
    "WitnessNotFound",
]
