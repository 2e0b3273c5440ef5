"""
PACEModeler Reachability Search

Bounded exploration of the transition graph from an initial knowledge
state, looking for a state that satisfies a target predicate.

Design Principles:
1. States are values: backtracking keeps predecessors, never rolls back
2. Parameters come from the caller's Universe and the state's own bags
3. Exhaustion is reported honestly: a search that hit a bound says so and
   never claims the target is unreachable

Example:
    search = ReachabilitySearch(SearchConfig(max_depth=5), Universe.build())
    result = search.run(init(), session_key_compromised)
    if result.found:
        print(result.witness.trace)
"""

from __future__ import annotations

import itertools
from collections import deque
from enum import Enum, auto
from typing import Any, Deque, Dict, Iterator, List, Optional, Sequence, Tuple

import attrs
import structlog
from returns.result import Failure, Result, Success

from pacemodeler.core.exceptions import InvariantViolation, WitnessNotFound
from pacemodeler.core.types import Message1, Message2
from pacemodeler.pace.properties import StatePredicate, is_monotone_extension
from pacemodeler.pace.rules import select_rules
from pacemodeler.pace.state import KnowledgeState
from pacemodeler.pace.transition import ParamKind, TransitionRule
from pacemodeler.search.config import SearchConfig, SearchStrategy, Universe
from pacemodeler.search.trace import Step, Trace


# =============================================================================
# RESULTS
# =============================================================================


class SearchOutcome(Enum):
    """How a search ended."""

    FOUND = auto()
    # A depth or state budget cut the search short
    NOT_FOUND_WITHIN_BOUND = auto()
    # Every state reachable over the universe was expanded
    EXHAUSTED = auto()


@attrs.define(frozen=True, slots=True)
class Witness:
    """A trace reaching a target state, with that state."""

    trace: Trace
    state: KnowledgeState


@attrs.define(frozen=True, slots=True)
class SearchResult:
    """
    Result of a reachability search.

    Attributes:
        outcome: How the search ended
        witness: Trace to the target (if found)
        states_explored: Number of expanded states
        max_depth_reached: Deepest trace expanded
        bound_hit: Which bound stopped the search ("max_depth" / "max_states")
    """

    outcome: SearchOutcome
    witness: Optional[Witness] = None
    states_explored: int = 0
    max_depth_reached: int = 0
    bound_hit: Optional[str] = None

    def __attrs_post_init__(self) -> None:
        if (self.outcome is SearchOutcome.FOUND) != (self.witness is not None):
            raise ValueError("A witness is present exactly when the target was found")

    @property
    def found(self) -> bool:
        return self.outcome is SearchOutcome.FOUND

    def describe(self) -> str:
        if self.outcome is SearchOutcome.FOUND:
            return f"Target found at depth {len(self.witness.trace)}"
        if self.outcome is SearchOutcome.NOT_FOUND_WITHIN_BOUND:
            return (
                f"Target not found within bound ({self.bound_hit} reached "
                f"after {self.states_explored} states)"
            )
        return (
            f"Target unreachable within the supplied universe "
            f"({self.states_explored} states explored)"
        )

    def unwrap_witness(self) -> Witness:
        """
        Return the witness.

        Raises:
            WitnessNotFound: If the target was not found
        """
        if self.witness is None:
            raise WitnessNotFound(self.describe())
        return self.witness


# =============================================================================
# DRIVER
# =============================================================================


@attrs.define
class ReachabilitySearch:
    """
    Bounded reachability search over knowledge states.

    Each expansion tries every enabled (rule, binding) pair. Principal,
    random and domain parameters range over the universe; message, cipher
    and exponent parameters range over what the current state holds.

    Deduplication keeps the shallowest depth each state was reached at, so
    depth-first search may re-expand a state found again higher up.
    """

    config: SearchConfig = attrs.Factory(SearchConfig)
    universe: Universe = attrs.Factory(Universe.build)

    _rules: Tuple[TransitionRule, ...] = attrs.field(init=False)
    _logger: Any = attrs.Factory(lambda: structlog.get_logger())

    def __attrs_post_init__(self) -> None:
        self._rules = select_rules(self.config.rules)

    @property
    def rules(self) -> Tuple[TransitionRule, ...]:
        return self._rules

    # -------------------------------------------------------------------------
    # Successor generation
    # -------------------------------------------------------------------------

    def _candidates(
        self, rule: TransitionRule, position: int, kind: ParamKind, state: KnowledgeState
    ) -> Sequence[Any]:
        if kind is ParamKind.PRINCIPAL:
            return self.universe.principals_for(rule.family, position)
        if kind is ParamKind.RANDOM:
            return self.universe.randoms
        if kind is ParamKind.DOMAIN:
            return self.universe.domain_parameters
        if kind is ParamKind.MESSAGE1:
            return list(state.messages_of(Message1))
        if kind is ParamKind.MESSAGE2:
            return list(state.messages_of(Message2))
        if kind is ParamKind.CIPHER1:
            return list(state.known_cipher1s.distinct())
        if kind is ParamKind.EXPO:
            return list(state.known_exponents.distinct())
        return list(state.known_cipher3s.distinct())

    def _admissible(self, rule: TransitionRule, params: Tuple[Any, ...]) -> bool:
        # Every rule starts with (sender, receiver)
        if not self.config.allow_self_addressed and params[0] == params[1]:
            return False
        binding_filter = self.config.binding_filter
        return binding_filter is None or binding_filter(rule.name, params)

    def enabled_bindings(
        self, state: KnowledgeState
    ) -> Iterator[Tuple[TransitionRule, Tuple[Any, ...]]]:
        """Lazily yield every admissible (rule, params) whose guard holds."""
        for rule in self._rules:
            candidates = [
                self._candidates(rule, i, kind, state) for i, kind in enumerate(rule.params)
            ]
            for params in itertools.product(*candidates):
                if self._admissible(rule, params) and rule.guard_holds(state, *params):
                    yield rule, params

    def successors(self, state: KnowledgeState) -> Iterator[Tuple[Step, KnowledgeState]]:
        for rule, params in self.enabled_bindings(state):
            yield Step(rule.name, params), rule.effect(state, *params)

    def _check_step(self, state: KnowledgeState, step: Step, nxt: KnowledgeState) -> None:
        if not is_monotone_extension(state, nxt):
            self._logger.error("invariant_violated", invariant="monotonicity", step=str(step))
            raise InvariantViolation(f"Invariant 'monotonicity' violated by {step}")

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def run(self, initial: KnowledgeState, target: StatePredicate) -> SearchResult:
        """
        Search for a state satisfying `target`.

        Returns:
            SearchResult with outcome FOUND, NOT_FOUND_WITHIN_BOUND or EXHAUSTED

        Raises:
            InvariantViolation: If check_monotonicity is set and a step
                forgets knowledge
        """
        config = self.config
        frontier: Deque[Tuple[KnowledgeState, Trace]] = deque([(initial, Trace(initial=initial))])
        best_depth: Dict[KnowledgeState, int] = {initial: 0}
        explored = 0
        max_depth_reached = 0
        bound_hit: Optional[str] = None

        self._logger.info(
            "search_started",
            target=getattr(target, "__name__", repr(target)),
            strategy=config.strategy.name,
            max_depth=config.max_depth,
            max_states=config.max_states,
            rules=[rule.name for rule in self._rules],
        )

        while frontier:
            if config.strategy is SearchStrategy.BREADTH_FIRST:
                state, trace = frontier.popleft()
            else:
                state, trace = frontier.pop()
            depth = len(trace)
            if config.deduplicate and best_depth.get(state, depth) < depth:
                continue

            explored += 1
            max_depth_reached = max(max_depth_reached, depth)

            if target(state):
                self._logger.info(
                    "witness_found",
                    depth=depth,
                    states_explored=explored,
                    trace=str(trace),
                )
                return SearchResult(
                    outcome=SearchOutcome.FOUND,
                    witness=Witness(trace=trace, state=state),
                    states_explored=explored,
                    max_depth_reached=max_depth_reached,
                )

            if explored % config.progress_interval == 0:
                self._logger.info(
                    "search_progress",
                    states_explored=explored,
                    frontier=len(frontier),
                    depth=depth,
                )

            if config.max_states is not None and explored >= config.max_states:
                bound_hit = "max_states"
                break

            if depth >= config.max_depth:
                if bound_hit is None and any(True for _ in self.enabled_bindings(state)):
                    bound_hit = "max_depth"
                continue

            children: List[Tuple[KnowledgeState, Trace]] = []
            for step, nxt in self.successors(state):
                if config.check_monotonicity:
                    self._check_step(state, step, nxt)
                if config.deduplicate:
                    if best_depth.get(nxt, depth + 2) <= depth + 1:
                        continue
                    best_depth[nxt] = depth + 1
                children.append((nxt, trace.extend(step)))
            if config.strategy is SearchStrategy.DEPTH_FIRST:
                # Pop in generation order
                children.reverse()
            frontier.extend(children)

        if bound_hit is not None:
            self._logger.info(
                "search_bound_reached",
                bound=bound_hit,
                states_explored=explored,
                max_depth_reached=max_depth_reached,
            )
            return SearchResult(
                outcome=SearchOutcome.NOT_FOUND_WITHIN_BOUND,
                states_explored=explored,
                max_depth_reached=max_depth_reached,
                bound_hit=bound_hit,
            )

        self._logger.info("search_exhausted", states_explored=explored)
        return SearchResult(
            outcome=SearchOutcome.EXHAUSTED,
            states_explored=explored,
            max_depth_reached=max_depth_reached,
        )

    def reach(self, initial: KnowledgeState, target: StatePredicate) -> Result[Witness, str]:
        """
        Search for `target`, as a Result.

        Returns:
            Success(witness) if found
            Failure(error_message) describing the bound or exhaustion otherwise
        """
        result = self.run(initial, target)
        if result.witness is not None:
            return Success(result.witness)
        return Failure(result.describe())
