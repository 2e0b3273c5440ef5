"""
PACEModeler Honest Protocol Steps

The three steps an honest chip or terminal performs.

Protocol Flow:
1. sdm1: P -> Q: Message1 carrying the password-encrypted nonce
2. sdm2: P -> Q: Message2 carrying P's public value on the mapped generator
3. sdm3: P -> Q: Message3 carrying the MAC keyed with the agreed key

Every ciphertext, public value and MAC an honest principal sends is
observable by the intruder, whoever it is addressed to.
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


# =============================================================================
# SDM1: SEND MESSAGE 1
# =============================================================================


def _sdm1_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    domain: DomainParameter,
) -> bool:
    return state.is_fresh(random)


def _sdm1_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    domain: DomainParameter,
) -> KnowledgeState:
    cipher1 = Cipher1(random, domain)
    intruder_randoms = state.intruder_randoms
    # Addressing the intruder directly hands it the nonce
    if receiver == INTRUDER and sender.knows_password:
        intruder_randoms = intruder_randoms.insert(random)
    return attrs.evolve(
        state,
        network=state.network.insert(
            Message1(sender, sender, receiver, cipher1=cipher1)
        ),
        used_randoms=state.used_randoms.insert(random),
        intruder_randoms=intruder_randoms,
        known_cipher1s=state.known_cipher1s.insert(cipher1),
    )


sdm1 = TransitionRule(
    name="sdm1",
    family=RuleFamily.HONEST,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.RANDOM, ParamKind.DOMAIN),
    guard=_sdm1_guard,
    effect=_sdm1_effect,
)


# =============================================================================
# SDM2: SEND MESSAGE 2
# =============================================================================


def _sdm2_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    message1: Message1,
) -> bool:
    if not state.network.member(message1) or not state.is_fresh(random):
        return False
    # Chip role: answering its own message 1
    if (
        message1.creator == sender
        and message1.sender == sender
        and sender.knows_password
    ):
        return True
    # Terminal role: answering a message 1 addressed to it by the peer
    return (
        message1.sender == receiver
        and message1.receiver == sender
        and sender.knows_password
        and message1.creator.knows_password
    )


def _sdm2_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    random: Random,
    message1: Message1,
) -> KnowledgeState:
    nonce = message1.cipher1.nonce
    expo = Expo(random, MapPoint(nonce, message1.cipher1.domain))
    return attrs.evolve(
        state,
        network=state.network.insert(Message2(sender, sender, receiver, expo=expo)),
        used_randoms=state.used_randoms.insert_all((random, nonce)),
        known_exponents=state.known_exponents.insert(expo),
    )


sdm2 = TransitionRule(
    name="sdm2",
    family=RuleFamily.HONEST,
    params=(ParamKind.PRINCIPAL, ParamKind.PRINCIPAL, ParamKind.RANDOM, ParamKind.MESSAGE1),
    guard=_sdm2_guard,
    effect=_sdm2_effect,
)


# =============================================================================
# SDM3: SEND MESSAGE 3
# =============================================================================


def _sdm3_guard(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    message1: Message1,
    peer_message2: Message2,
    own_message2: Message2,
) -> bool:
    network = state.network
    if not (
        network.member(message1)
        and network.member(peer_message2)
        and network.member(own_message2)
    ):
        return False
    if not (
        own_message2.creator == sender
        and own_message2.sender == sender
        and own_message2.receiver == receiver
    ):
        return False
    if not (peer_message2.sender == receiver and peer_message2.receiver == sender):
        return False
    base = own_message2.expo.base
    if message1.cipher1.nonce != base.seed or message1.cipher1.domain != base.domain:
        return False
    sent_own = (
        message1.creator == sender
        and message1.sender == sender
        and message1.receiver == receiver
    )
    received_from_peer = message1.sender == receiver and message1.receiver == sender
    return sent_own or received_from_peer


def _sdm3_effect(
    state: KnowledgeState,
    sender: Principal,
    receiver: Principal,
    message1: Message1,
    peer_message2: Message2,
    own_message2: Message2,
) -> KnowledgeState:
    key = Hash(own_message2.expo.exponent, peer_message2.expo)
    mac = Cipher3(key, peer_message2.expo, message1.cipher1.domain)
    return attrs.evolve(
        state,
        network=state.network.insert(Message3(sender, sender, receiver, cipher3=mac)),
        known_cipher3s=state.known_cipher3s.insert(mac),
    )


sdm3 = TransitionRule(
    name="sdm3",
    family=RuleFamily.HONEST,
    params=(
        ParamKind.PRINCIPAL,
        ParamKind.PRINCIPAL,
        ParamKind.MESSAGE1,
        ParamKind.MESSAGE2,
        ParamKind.MESSAGE2,
    ),
    guard=_sdm3_guard,
    effect=_sdm3_effect,
)


HONEST_RULES = (sdm1, sdm2, sdm3)
