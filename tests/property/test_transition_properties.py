"""
Property-based tests for the transition system.

Drives random runs through the rule set and checks that knowledge only
grows, disabled rules leave states untouched, and recorded runs replay.
"""

import itertools

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from pacemodeler.pace.properties import (
    check_monotonicity_over_trace,
    intruder_randoms_are_used,
    is_monotone_extension,
)
from pacemodeler.pace.rules import ALL_RULES
from pacemodeler.pace.state import init
from pacemodeler.search.config import SearchConfig, Universe
from pacemodeler.search.driver import ReachabilitySearch
from pacemodeler.search.trace import Step, Trace


UNIVERSE = Universe.build(principals=("chip", "terminal"), n_randoms=4, domains=("d1",))
SEARCH = ReachabilitySearch(SearchConfig(), UNIVERSE)

run_settings = settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


def _random_run(data, length):
    """Apply up to `length` randomly chosen enabled bindings."""
    state = init()
    trace = Trace()
    states = [state]
    for _ in range(length):
        bindings = list(SEARCH.enabled_bindings(state))
        if not bindings:
            break
        rule, params = data.draw(st.sampled_from(bindings))
        step = Step(rule.name, params)
        state = rule.apply(state, *params)
        trace = trace.extend(step)
        states.append(state)
    return trace, states


def _any_binding(data, rule, state):
    """A binding of `rule` drawn from all candidates, enabled or not."""
    candidates = [
        SEARCH._candidates(rule, i, kind, state) for i, kind in enumerate(rule.params)
    ]
    if not all(candidates):
        return None
    return tuple(data.draw(st.sampled_from(list(c))) for c in candidates)


# =============================================================================
# RUN PROPERTIES
# =============================================================================


class TestRunProperties:
    """Property-based tests over random runs."""

    @run_settings
    @given(st.data(), st.integers(min_value=1, max_value=6))
    def test_knowledge_only_grows(self, data, length):
        """Property: every step is a monotone extension of its predecessor."""
        _, states = _random_run(data, length)
        assert check_monotonicity_over_trace(states) == []
        assert is_monotone_extension(states[0], states[-1])

    @run_settings
    @given(st.data(), st.integers(min_value=1, max_value=6))
    def test_intruder_randoms_always_used(self, data, length):
        _, states = _random_run(data, length)
        assert all(intruder_randoms_are_used(s) for s in states)

    @run_settings
    @given(st.data(), st.integers(min_value=1, max_value=6))
    def test_enabled_steps_change_state(self, data, length):
        """Property: every enabled step inserts a message onto the network."""
        _, states = _random_run(data, length)
        for before, after in zip(states, states[1:]):
            assert len(after.network) == len(before.network) + 1

    @run_settings
    @given(st.data(), st.integers(min_value=1, max_value=6))
    def test_runs_replay(self, data, length):
        """Property: a recorded run replays to the same states and verifies."""
        trace, states = _random_run(data, length)
        assert trace.verify() == []
        assert trace.replay() == states


# =============================================================================
# GUARD PROPERTIES
# =============================================================================


class TestGuardProperties:
    """Property-based tests for guarded application."""

    @run_settings
    @given(st.data(), st.integers(min_value=0, max_value=4), st.sampled_from(ALL_RULES))
    def test_disabled_rule_is_identity(self, data, length, rule):
        """Property: a rule whose guard fails returns the very same state."""
        _, states = _random_run(data, length)
        state = states[-1]
        params = _any_binding(data, rule, state)
        if params is None:
            return
        after = rule.apply(state, *params)
        if rule.guard_holds(state, *params):
            assert is_monotone_extension(state, after)
        else:
            assert after is state

    @run_settings
    @given(st.data(), st.integers(min_value=0, max_value=4))
    def test_guard_is_pure(self, data, length):
        """Property: evaluating a guard twice gives the same answer."""
        _, states = _random_run(data, length)
        state = states[-1]
        for rule in ALL_RULES:
            params = _any_binding(data, rule, state)
            if params is not None:
                assert rule.guard_holds(state, *params) == rule.guard_holds(state, *params)

    @pytest.mark.parametrize("rule", ALL_RULES, ids=lambda r: r.name)
    def test_wrong_types_disable(self, rule):
        """Every rule is disabled when handed plain strings."""
        params = tuple(itertools.repeat("x", rule.arity))
        assert not rule.guard_holds(init(), *params)
        assert rule.apply(init(), *params) is init()
