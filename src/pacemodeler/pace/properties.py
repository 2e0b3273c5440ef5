"""
PACEModeler Properties

Target predicates handed to the reachability search, and knowledge
invariants checked along a run.

Targets describe attacks: a search that reaches a state satisfying one has
found a trace where the property fails for the protocol.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Sequence

from pacemodeler.core.types import Hash, Message3
from pacemodeler.pace.state import KnowledgeState

StatePredicate = Callable[[KnowledgeState], bool]


# =============================================================================
# TARGETS
# =============================================================================


def intruder_knows_key(key: Hash) -> StatePredicate:
    """Predicate: the intruder has derived a key equal to `key`."""

    def predicate(state: KnowledgeState) -> bool:
        return state.known_hashes.member(key)

    predicate.__name__ = f"intruder_knows_key({key})"
    return predicate


def _honest_message3s(state: KnowledgeState) -> Iterator[Message3]:
    for msg in state.messages_of(Message3):
        if not msg.is_forged:
            yield msg


def honest_run_completed(state: KnowledgeState) -> bool:
    """Some honest principal has sent its authentication token."""
    return any(True for _ in _honest_message3s(state))


def session_key_compromised(state: KnowledgeState) -> bool:
    """
    Secrecy: the intruder knows a key an honest principal authenticated with.
    """
    return any(
        state.known_hashes.member(msg.cipher3.key) for msg in _honest_message3s(state)
    )


def forged_mac_accepted(state: KnowledgeState) -> bool:
    """
    Authentication: a forged token claims honest sender P towards Q, its key
    equals the key Q itself authenticated with towards P, and P never sent
    that token. Forwarding P's own token does not count.
    """
    honest = list(_honest_message3s(state))
    forged = [
        msg
        for msg in state.messages_of(Message3)
        if msg.is_forged and msg.sender.knows_password
    ]
    for msg in forged:
        produced_by_sender = {h.cipher3 for h in honest if h.sender == msg.sender}
        if msg.cipher3 in produced_by_sender:
            continue
        for peer in honest:
            if (
                peer.sender == msg.receiver
                and peer.receiver == msg.sender
                and peer.cipher3.key == msg.cipher3.key
            ):
                return True
    return False


# =============================================================================
# INVARIANTS
# =============================================================================


def is_monotone_extension(before: KnowledgeState, after: KnowledgeState) -> bool:
    """
    Invariant: nothing learned is ever forgotten.

    Every bag of `after` contains (by membership) every element of the
    corresponding bag of `before`.
    """
    after_bags = after.observers()
    return all(
        bag.issubbag(after_bags[name]) for name, bag in before.observers().items()
    )


def intruder_randoms_are_used(state: KnowledgeState) -> bool:
    """Invariant: a random the intruder owns is never fresh."""
    return state.intruder_randoms.issubbag(state.used_randoms)


def check_monotonicity_over_trace(states: Sequence[KnowledgeState]) -> List[str]:
    """
    Check monotonicity holds between consecutive states of a run.

    Args:
        states: States in run order, initial state first

    Returns:
        List of error messages (empty if invariant holds)
    """
    errors = []

    for i in range(1, len(states)):
        before, after = states[i - 1], states[i]
        after_bags = after.observers()
        for name, bag in before.observers().items():
            if not bag.issubbag(after_bags[name]):
                errors.append(
                    f"Invariant 'monotonicity' violated at step {i}: {name} shrank"
                )

    return errors
