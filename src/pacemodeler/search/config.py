"""
PACEModeler Search Configuration

The finite parameter universe a search draws from, and the bounds and
reductions it runs under.

Rules quantify over arbitrary principals and randoms; the driver only ever
tries the concrete values listed in a Universe.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Callable, Iterable, Optional, Tuple

import attrs
from attrs import field, validators

from pacemodeler.core.types import INTRUDER, DomainParameter, Principal, Random
from pacemodeler.pace.rules import RULES, get_rule
from pacemodeler.pace.transition import RuleFamily

BindingFilter = Callable[[str, Tuple[Any, ...]], bool]


def _tuple_of(kind: type) -> Callable[[Iterable[Any]], Tuple[Any, ...]]:
    def convert(values: Iterable[Any]) -> Tuple[Any, ...]:
        return tuple(v if isinstance(v, kind) else kind(v) for v in values)

    return convert


# =============================================================================
# UNIVERSE
# =============================================================================


@attrs.define(frozen=True)
class Universe:
    """
    Concrete values the driver may bind rule parameters to.

    Attributes:
        principals: Honest participants (chip, terminal, ...)
        randoms: Nonce pool; a value not yet used in a state is fresh there
        domain_parameters: Curve domains
        include_intruder: Let the intruder appear in envelopes

    Plain strings are accepted and wrapped in the matching term type.

    INVARIANT: principals contains no intruder
    """

    principals: Tuple[Principal, ...] = field(converter=_tuple_of(Principal))
    randoms: Tuple[Random, ...] = field(converter=_tuple_of(Random))
    domain_parameters: Tuple[DomainParameter, ...] = field(
        converter=_tuple_of(DomainParameter)
    )
    include_intruder: bool = True

    @principals.validator
    def _check_principals(self, attribute: attrs.Attribute, value: Tuple[Principal, ...]) -> None:
        if any(p.is_intruder for p in value):
            raise ValueError("The intruder is not an honest principal")

    @classmethod
    def build(
        cls,
        principals: Iterable[str] = ("chip", "terminal"),
        n_randoms: int = 3,
        domains: Iterable[str] = ("dp",),
        include_intruder: bool = True,
    ) -> Universe:
        """Universe with randoms labelled r1..rN."""
        return cls(
            principals=principals,
            randoms=[f"r{i}" for i in range(1, n_randoms + 1)],
            domain_parameters=domains,
            include_intruder=include_intruder,
        )

    @property
    def all_principals(self) -> Tuple[Principal, ...]:
        if self.include_intruder:
            return self.principals + (INTRUDER,)
        return self.principals

    def principals_for(self, family: RuleFamily, position: int) -> Tuple[Principal, ...]:
        """
        Candidates for a principal parameter.

        The acting principal of an honest rule (position 0) is always honest;
        every other position may name the intruder.
        """
        if family is RuleFamily.HONEST and position == 0:
            return self.principals
        return self.all_principals


# =============================================================================
# SEARCH CONFIGURATION
# =============================================================================


class SearchStrategy(Enum):
    """Frontier discipline."""

    BREADTH_FIRST = auto()
    DEPTH_FIRST = auto()


@attrs.define
class SearchConfig:
    """
    Reachability search configuration.

    Attributes:
        max_depth: Longest trace explored
        max_states: Budget of expanded states (None for unlimited)
        strategy: Breadth-first finds shortest witnesses
        rules: Names of the rules the driver may apply
        deduplicate: Skip states already reached at the same or lower depth
        check_monotonicity: Raise InvariantViolation if a step forgets knowledge
        allow_self_addressed: Try bindings whose sender equals receiver
        binding_filter: Caller reduction over (rule_name, params)
        progress_interval: Log progress every N expanded states
    """

    max_depth: int = field(default=6, validator=[validators.instance_of(int), validators.ge(0)])
    max_states: Optional[int] = field(
        default=100_000,
        validator=validators.optional([validators.instance_of(int), validators.ge(1)]),
    )
    strategy: SearchStrategy = field(
        default=SearchStrategy.BREADTH_FIRST,
        validator=validators.instance_of(SearchStrategy),
    )
    rules: Tuple[str, ...] = field(factory=lambda: tuple(RULES), converter=tuple)
    deduplicate: bool = True
    check_monotonicity: bool = False
    allow_self_addressed: bool = False
    binding_filter: Optional[BindingFilter] = None
    progress_interval: int = field(default=10_000, validator=validators.ge(1))

    @rules.validator
    def _check_rules(self, attribute: attrs.Attribute, value: Tuple[str, ...]) -> None:
        if not value:
            raise ValueError("At least one rule must be enabled")
        for name in value:
            get_rule(name)

    @classmethod
    def for_family(cls, family: RuleFamily, **kwargs: Any) -> SearchConfig:
        """Config enabling only the rules of one family."""
        names = tuple(name for name, rule in RULES.items() if rule.family is family)
        return cls(rules=names, **kwargs)
