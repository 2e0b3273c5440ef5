"""
PACEModeler Exception Types

Custom exceptions for the model checker.

Transition rules never raise: a disabled rule is a no-op. These exceptions
cover misuse of the tooling around the rules (unknown rule names, a search
result unwrapped without a witness) and broken invariants.
"""

from typing import Optional


class PACEModelerError(Exception):
    """Base exception for all PACEModeler errors."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class InvariantViolation(PACEModelerError):
    """
    Knowledge invariant was violated.

    Raised by the search driver when a transition produces a state whose
    knowledge is not a superset of its predecessor's. This means a rule
    implementation is broken, not that the intruder found an attack.
    """

    pass


class UnknownRuleError(PACEModelerError):
    """No transition rule is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown transition rule: {name!r}")
        self.name = name


class WitnessNotFound(PACEModelerError):
    """
    A search result without a witness was unwrapped.

    The message distinguishes a bounded search that gave up from one that
    exhausted its finite search space.
    """

    pass
