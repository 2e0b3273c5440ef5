"""
PACEModeler Transition Rules

Guarded transition machinery shared by the honest and intruder rule families.

Design Principles:
1. Pure guard and effect functions (no side effects)
2. Total: a disabled rule returns the input state object unchanged
3. Wrongly typed parameters disable the rule instead of raising
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Callable, Tuple

import attrs
from returns.result import Failure, Result, Success

from pacemodeler.core.types import (
    Cipher1,
    Cipher3,
    DomainParameter,
    Expo,
    Message1,
    Message2,
    Principal,
    Random,
)
from pacemodeler.pace.state import KnowledgeState


class RuleFamily(Enum):
    """Who executes a rule."""

    HONEST = auto()
    INTRUDER = auto()


class ParamKind(Enum):
    """
    Kind of a rule parameter.

    The search driver draws PRINCIPAL, RANDOM and DOMAIN values from its
    universe and every other kind from the current state.
    """

    PRINCIPAL = Principal
    RANDOM = Random
    DOMAIN = DomainParameter
    MESSAGE1 = Message1
    MESSAGE2 = Message2
    CIPHER1 = Cipher1
    EXPO = Expo
    CIPHER3 = Cipher3

    @property
    def term_type(self) -> type:
        return self.value

    @property
    def from_universe(self) -> bool:
        return self in (ParamKind.PRINCIPAL, ParamKind.RANDOM, ParamKind.DOMAIN)


GuardFn = Callable[..., bool]
EffectFn = Callable[..., KnowledgeState]


@attrs.define(frozen=True, slots=True)
class TransitionRule:
    """
    A named, guarded state transformer.

    Usage:
        state = sdm1(init(), chip, terminal, r1, d1)
        if sdm1.guard_holds(state, chip, terminal, r1, d1):
            ...

    The effect function is only ever called when the guard holds, so it may
    assume well-typed parameters.
    """

    name: str
    family: RuleFamily
    params: Tuple[ParamKind, ...]
    guard: GuardFn = attrs.field(repr=False)
    effect: EffectFn = attrs.field(repr=False)

    @property
    def arity(self) -> int:
        return len(self.params)

    def well_typed(self, params: Tuple[Any, ...]) -> bool:
        return len(params) == self.arity and all(
            isinstance(value, kind.term_type) for value, kind in zip(params, self.params)
        )

    def guard_holds(self, state: KnowledgeState, *params: Any) -> bool:
        if len(params) != self.arity:
            raise TypeError(
                f"{self.name} takes {self.arity} parameters, got {len(params)}"
            )
        if not self.well_typed(params):
            return False
        return self.guard(state, *params)

    def apply(self, state: KnowledgeState, *params: Any) -> KnowledgeState:
        if not self.guard_holds(state, *params):
            return state
        return self.effect(state, *params)

    def try_apply(
        self, state: KnowledgeState, *params: Any
    ) -> Result[KnowledgeState, str]:
        """
        Apply the rule, reporting a disabled instance explicitly.

        Returns:
            Success(new_state) if the guard holds
            Failure(error_message) otherwise
        """
        if not self.guard_holds(state, *params):
            return Failure(f"Guard of {self.name} does not hold")
        return Success(self.effect(state, *params))

    def __call__(self, state: KnowledgeState, *params: Any) -> KnowledgeState:
        return self.apply(state, *params)

    def __str__(self) -> str:
        return self.name
