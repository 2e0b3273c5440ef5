"""
PACEModeler Traces

Sequences of applied rule bindings, as found by the search driver.

A trace is replayable: re-applying its steps from its initial state
reproduces every intermediate state, and a step whose guard no longer holds
is reported rather than silently skipped.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

import attrs

from pacemodeler.pace.rules import get_rule
from pacemodeler.pace.state import INITIAL_STATE, KnowledgeState
from pacemodeler.pace.transition import TransitionRule


@attrs.define(frozen=True, slots=True)
class Step:
    """
    Immutable record of one rule application.

    Used for witness reporting and replay.
    """

    rule: str
    params: Tuple[Any, ...] = attrs.field(converter=tuple)

    @property
    def transition(self) -> TransitionRule:
        return get_rule(self.rule)

    def apply(self, state: KnowledgeState) -> KnowledgeState:
        return self.transition.apply(state, *self.params)

    def enabled_in(self, state: KnowledgeState) -> bool:
        return self.transition.guard_holds(state, *self.params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule": self.rule,
            "params": [str(p) for p in self.params],
        }

    def __str__(self) -> str:
        return f"{self.rule}({', '.join(str(p) for p in self.params)})"


@attrs.define(frozen=True, slots=True)
class Trace:
    """A run: an initial state and the steps applied to it, in order."""

    steps: Tuple[Step, ...] = attrs.field(default=(), converter=tuple)
    initial: KnowledgeState = INITIAL_STATE

    def extend(self, step: Step) -> Trace:
        return attrs.evolve(self, steps=self.steps + (step,))

    def replay(self) -> List[KnowledgeState]:
        """
        Re-apply every step.

        Returns:
            States in run order, initial state first
        """
        states = [self.initial]
        for step in self.steps:
            states.append(step.apply(states[-1]))
        return states

    @property
    def final_state(self) -> KnowledgeState:
        return self.replay()[-1]

    def verify(self) -> List[str]:
        """
        Check every step is enabled when replayed.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        state = self.initial

        for i, step in enumerate(self.steps):
            if not step.enabled_in(state):
                errors.append(f"Step {i}: {step} is disabled")
                continue
            state = step.apply(state)

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": len(self.steps),
            "steps": [step.to_dict() for step in self.steps],
        }

    def export_json(self) -> str:
        """Export trace as JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def __len__(self) -> int:
        return len(self.steps)

    def __str__(self) -> str:
        return " ; ".join(str(step) for step in self.steps) or "<empty trace>"
