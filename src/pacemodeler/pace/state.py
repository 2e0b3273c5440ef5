"""
PACEModeler Knowledge State

One point in a protocol run: everything sent on the wire plus everything
the intruder has learned, as seven bags.

States are values. Every transition returns a new state built with
attrs.evolve; earlier states stay valid for backtracking and comparison.
"""

from __future__ import annotations

from typing import Dict, Iterator, Type, TypeVar

import attrs
from attrs import field

from pacemodeler.core.bag import Bag
from pacemodeler.core.types import (
    Cipher1,
    Cipher3,
    Expo,
    Hash,
    Message,
    Random,
)

M = TypeVar("M", bound=Message)


@attrs.define(frozen=True, slots=True)
class KnowledgeState:
    """
    Protocol and intruder knowledge at one point of a run.

    Attributes:
        network: Every message ever sent or forged
        used_randoms: Randoms that are no longer fresh
        intruder_randoms: Randoms the intruder chose or was handed
        known_exponents: Diffie-Hellman public values seen on the wire
        known_hashes: Keys the intruder has derived
        known_cipher1s: Message-1 ciphertexts seen on the wire
        known_cipher3s: Message-3 MACs seen on the wire

    INVARIANT: intruder_randoms is a subbag of used_randoms (membership)
    """

    network: Bag[Message] = field(factory=Bag.empty)
    used_randoms: Bag[Random] = field(factory=Bag.empty)
    intruder_randoms: Bag[Random] = field(factory=Bag.empty)
    known_exponents: Bag[Expo] = field(factory=Bag.empty)
    known_hashes: Bag[Hash] = field(factory=Bag.empty)
    known_cipher1s: Bag[Cipher1] = field(factory=Bag.empty)
    known_cipher3s: Bag[Cipher3] = field(factory=Bag.empty)

    def is_fresh(self, random: Random) -> bool:
        return not self.used_randoms.member(random)

    def intruder_owns(self, random: Random) -> bool:
        return self.intruder_randoms.member(random)

    def messages_of(self, kind: Type[M]) -> Iterator[M]:
        """Distinct network messages of one shape."""
        for msg in self.network.distinct():
            if type(msg) is kind:
                yield msg

    def observers(self) -> Dict[str, Bag]:
        """Name to bag for every knowledge category."""
        return {a.name: getattr(self, a.name) for a in attrs.fields(KnowledgeState)}

    @property
    def size(self) -> int:
        return sum(len(bag) for bag in self.observers().values())

    def __str__(self) -> str:
        parts = [f"{name}={len(bag)}" for name, bag in self.observers().items()]
        return f"KnowledgeState({', '.join(parts)})"


INITIAL_STATE = KnowledgeState()


def init() -> KnowledgeState:
    """The empty state every run starts from."""
    return INITIAL_STATE
