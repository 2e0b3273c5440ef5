#!/usr/bin/env python3
"""
PACE Intruder Search Example

Demonstrates how to use PACEModeler to look for attacks on the PACE
handshake with a bounded reachability search.

Features:
1. Stepping an honest chip/terminal run by hand
2. Searching for an honest run with the honest rules only
3. Searching for a session-key leak with the intruder rules enabled
4. Witness replay, verification and JSON export
5. Result-based API via reach()
"""

from returns.result import Failure, Success

from pacemodeler.core import (
    INTRUDER,
    Cipher1,
    DomainParameter,
    Message1,
    Message2,
    Principal,
    Random,
)
from pacemodeler.pace import (
    RuleFamily,
    forged_mac_accepted,
    honest_run_completed,
    init,
    sdm1,
    sdm2,
    sdm3,
    session_key_compromised,
)
from pacemodeler.search import ReachabilitySearch, SearchConfig, Universe


def main():
    """Demonstrate PACE model checking."""

    print("=" * 70)
    print("PACEModeler - Bounded Attack Search")
    print("=" * 70)
    print()

    chip = Principal("chip")
    terminal = Principal("terminal")
    r1, r2, r3 = Random("r1"), Random("r2"), Random("r3")
    dp = DomainParameter("dp")

    # ==========================================================================
    # EXAMPLE 1: Honest Run By Hand
    # ==========================================================================
    print("1. Honest Run By Hand")
    print("-" * 40)

    state = sdm1(init(), chip, terminal, r1, dp)
    message1 = Message1(chip, chip, terminal, cipher1=Cipher1(r1, dp))
    state = sdm2(state, chip, terminal, r2, message1)
    state = sdm2(state, terminal, chip, r3, message1)
    chip_m2 = next(m for m in state.messages_of(Message2) if m.creator == chip)
    terminal_m2 = next(m for m in state.messages_of(Message2) if m.creator == terminal)
    state = sdm3(state, chip, terminal, message1, terminal_m2, chip_m2)

    for msg in state.network.distinct():
        print(f"   {msg}")
    print(f"   Honest run completed: {honest_run_completed(state)}")
    print(f"   Key compromised: {session_key_compromised(state)}")
    print()

    # Disabled steps leave the state untouched
    again = sdm1(state, chip, terminal, r1, dp)
    print(f"   Reusing r1 is a no-op: {again is state}")
    print()

    # ==========================================================================
    # EXAMPLE 2: Honest Rules Only
    # ==========================================================================
    print("2. Search With Honest Rules Only")
    print("-" * 40)

    honest_universe = Universe.build(n_randoms=3, include_intruder=False)
    search = ReachabilitySearch(
        SearchConfig.for_family(RuleFamily.HONEST, max_depth=4),
        honest_universe,
    )
    result = search.run(init(), honest_run_completed)

    print(f"   {result.describe()}")
    print(f"   States explored: {result.states_explored}")
    if result.found:
        for step in result.witness.trace.steps:
            print(f"     {step}")
    print()

    # ==========================================================================
    # EXAMPLE 3: Chip Talking To The Intruder
    # ==========================================================================
    print("3. Session Key Secrecy Against The Intruder")
    print("-" * 40)

    universe = Universe.build(principals=("chip",), n_randoms=3)
    config = SearchConfig(
        rules=["sdm1", "sdm2", "sdm3", "fkm22", "fkm32"],
        max_depth=5,
    )
    result = ReachabilitySearch(config, universe).run(init(), session_key_compromised)

    print(f"   {result.describe()}")
    if result.found:
        trace = result.witness.trace
        for step in trace.steps:
            print(f"     {step}")
        print(f"   Replay errors: {trace.verify() or 'none'}")
        print()
        print("   Trace as JSON:")
        for line in trace.export_json().splitlines()[:8]:
            print(f"     {line}")
        print("     ...")
    print()
    print(f"   (The chip addressed {INTRUDER} directly, handing over its nonce)")
    print()

    # ==========================================================================
    # EXAMPLE 4: Result-Based API
    # ==========================================================================
    print("4. Result-Based API")
    print("-" * 40)

    shallow = ReachabilitySearch(SearchConfig(max_depth=2), Universe.build(n_randoms=2))
    outcome = shallow.reach(init(), forged_mac_accepted)

    if isinstance(outcome, Success):
        print(f"   Forgery found: {outcome.unwrap().trace}")
    elif isinstance(outcome, Failure):
        print(f"   {outcome.failure()}")
    print()

    # ==========================================================================
    # SUMMARY
    # ==========================================================================
    print("=" * 70)
    print("Summary")
    print("=" * 70)
    print()
    print("This example demonstrated:")
    print("  1. Applying guarded protocol steps by hand")
    print("  2. Breadth-first search for an honest run")
    print("  3. Finding a key leak when the chip runs PACE with the intruder")
    print("  4. Witness replay, verification and JSON export")
    print("  5. Bounded failure reporting via reach()")
    print()
    print("For larger models:")
    print("  - Restrict the rule set with SearchConfig(rules=...)")
    print("  - Prune bindings with SearchConfig(binding_filter=...)")
    print("  - Raise max_states before raising max_depth")
    print()


if __name__ == "__main__":
    main()
