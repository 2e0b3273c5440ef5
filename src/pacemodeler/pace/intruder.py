"""
PACEModeler Intruder Forgery Steps

Dolev-Yao style actions of the network intruder. The intruder may replay
anything it has observed under any envelope, and may build new messages
from randoms it owns or freshly picks. It never learns the password, so it
can only mint message-1 ciphertexts over its own nonces.

Rules:
- fkm11 / fkm21 / fkm31: replay an observed payload under a forged envelope
- fkm12 / fkm22 / fkm32: build a new payload from intruder material
"""

from __future__ import annotations

import attrs

from pacemodeler.core.types import (
    INTRUDER,
    Cipher1,
    Cipher3,
    DomainParameter,
    Expo,
    Hash,
    MapPoint,
    Message1,
    Message2,
    Message3,
    Principal,
    Random,
)
from pacemodeler.pace.state import KnowledgeState
from pacemodeler.pace.transition import ParamKind, RuleFamily, TransitionRule


def _owned_or_fresh(state: KnowledgeState, random: Random) -> bool:
    return state.intruder_owns(random) or state.is_fresh(random)


# =============================================================================
# MESSAGE 1 FORGERIES
# =============================================================================


def _fkm11_guard(
    state: KnowledgeState, sender: Principal, receiver: Principal, cipher1: Cipher1
) -> bool:
    return state.known_cipher1s.member(cipher1)


def _fkm11_effect(
    state: KnowledgeState, sender: Principal, receiver: Principal, cipher1: Cipher1
) -> KnowledgeState:
    return attrs.evolve(
        state,
        network=state.network.insert(Message1(INTRUDER, sender, receiver, cipher1=cipher1)),
    )


fkm11 = TransitionRule(
    name="fkm11",
    family=RuleFamily.INTRUDER,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.CIPHER1),
    guard=_fkm11_guard,
    effect=_fkm11_effect,
)


def _fkm12_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    domain: DomainParameter,
) -> bool:
    return _owned_or_fresh(state, random)


def _fkm12_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    domain: DomainParameter,
) -> KnowledgeState:
    cipher1 = Cipher1(random, domain)
    return attrs.evolve(
        state,
        network=state.network.insert(Message1(INTRUDER, sender, receiver, cipher1=cipher1)),
        used_randoms=state.used_randoms.insert(random),
        intruder_randoms=state.intruder_randoms.insert(random),
        known_cipher1s=state.known_cipher1s.insert(cipher1),
    )


fkm12 = TransitionRule(
    name="fkm12",
    family=RuleFamily.INTRUDER,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.RANDOM, ParamKind.DOMAIN),
    guard=_fkm12_guard,
    effect=_fkm12_effect,
)


# =============================================================================
# MESSAGE 2 FORGERIES
# =============================================================================


def _fkm21_guard(
    state: KnowledgeState, sender: Principal, receiver: Principal, expo: Expo
) -> bool:
    return state.known_exponents.member(expo)


def _fkm21_effect(
    state: KnowledgeState, sender: Principal, receiver: Principal, expo: Expo
) -> KnowledgeState:
    # Both randoms behind a replayed public value stop being fresh, even
    # though replaying consumes neither.
    return attrs.evolve(
        state,
        network=state.network.insert(Message2(INTRUDER, sender, receiver, expo=expo)),
        used_randoms=state.used_randoms.insert_all((expo.exponent, expo.base.seed)),
    )


fkm21 = TransitionRule(
    name="fkm21",
    family=RuleFamily.INTRUDER,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.EXPO),
    guard=_fkm21_guard,
    effect=_fkm21_effect,
)


def _fkm22_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    exponent: Random,
    seed: Random,
    domain: DomainParameter,
) -> bool:
    return state.intruder_owns(seed) and _owned_or_fresh(state, exponent)


def _fkm22_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    exponent: Random,
    seed: Random,
    domain: DomainParameter,
) -> KnowledgeState:
    expo = Expo(exponent, MapPoint(seed, domain))
    return attrs.evolve(
        state,
        network=state.network.insert(Message2(INTRUDER, sender, receiver, expo=expo)),
        used_randoms=state.used_randoms.insert_all((exponent, seed)),
        intruder_randoms=state.intruder_randoms.insert_all((exponent, seed)),
        known_exponents=state.known_exponents.insert(expo),
    )


fkm22 = TransitionRule(
    name="fkm22",
    family=RuleFamily.INTRUDER,
    params=(
        ParamKind.PRINCIPAL,
        ParamKind.PRINCIPAL,
        ParamKind.RANDOM,
        ParamKind.RANDOM,
        ParamKind.DOMAIN,
    ),
    guard=_fkm22_guard,
    effect=_fkm22_effect,
)


# =============================================================================
# MESSAGE 3 FORGERIES
# =============================================================================


def _fkm31_guard(
    state: KnowledgeState, sender: Principal, receiver: Principal, cipher3: Cipher3
) -> bool:
    return state.known_cipher3s.member(cipher3)


def _fkm31_effect(
    state: KnowledgeState, sender: Principal, receiver: Principal, cipher3: Cipher3
) -> KnowledgeState:
    return attrs.evolve(
        state,
        network=state.network.insert(Message3(INTRUDER, sender, receiver, cipher3=cipher3)),
    )


fkm31 = TransitionRule(
    name="fkm31",
    family=RuleFamily.INTRUDER,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.CIPHER3),
    guard=_fkm31_guard,
    effect=_fkm31_effect,
)


def _fkm32_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    secret: Random,
    key_expo: Expo,
    mac_expo: Expo,
    domain: DomainParameter,
) -> bool:
    return (
        _owned_or_fresh(state, secret)
        and state.known_exponents.member(key_expo)
        and state.known_exponents.member(mac_expo)
    )


def _fkm32_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    secret: Random,
    key_expo: Expo,
    mac_expo: Expo,
    domain: DomainParameter,
) -> KnowledgeState:
    key = Hash(secret, key_expo)
    mac = Cipher3(key, mac_expo, domain)
    return attrs.evolve(
        state,
        network=state.network.insert(Message3(INTRUDER, sender, receiver, cipher3=mac)),
        used_randoms=state.used_randoms.insert(secret),
        intruder_randoms=state.intruder_randoms.insert(secret),
        known_hashes=state.known_hashes.insert(key),
        known_cipher3s=state.known_cipher3s.insert(mac),
    )


fkm32 = TransitionRule(
    name="fkm32",
    family=RuleFamily.INTRUDER,
    params=(
        ParamKind.PRINCIPAL,
        ParamKind.PRINCIPAL,
        ParamKind.RANDOM,
        ParamKind.EXPO,
        ParamKind.EXPO,
        ParamKind.DOMAIN,
    ),
    guard=_fkm32_guard,
    effect=_fkm32_effect,
)


INTRUDER_RULES = (fkm11, fkm12, fkm21, fkm22, fkm31, fkm32)
