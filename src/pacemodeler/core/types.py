"""
PACEModeler Term Algebra

Symbolic terms for the PACE handshake between a chip and a terminal that
share a weak password. Terms are opaque algebraic tokens: nothing here
performs real group arithmetic or hashing.

Design Principles:
- Immutable: All terms use frozen attrs classes
- Validated: Component types enforced at construction
- Hashable: Every term can live in a Bag or a visited-state set

The one non-syntactic equality is Hash: two keys built from cross-matched
(exponent, base) pairs are the same Diffie-Hellman key.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Tuple

import attrs
from attrs import field, validators


_label_validator = [validators.instance_of(str), validators.min_len(1)]


# =============================================================================
# IDENTITY TYPES
# =============================================================================


@attrs.define(frozen=True, slots=True)
class Principal:
    """
    Protocol participant identity.

    INVARIANT: exactly one principal, INTRUDER, does not know the password
    """

    name: str = field(validator=_label_validator)

    @property
    def is_intruder(self) -> bool:
        return self.name == INTRUDER_NAME

    @property
    def knows_password(self) -> bool:
        """Closed world: the password never leaks to the intruder."""
        return not self.is_intruder

    def __str__(self) -> str:
        return self.name


INTRUDER_NAME = "intruder"
INTRUDER = Principal(INTRUDER_NAME)


# =============================================================================
# OPAQUE TOKENS
# =============================================================================


@attrs.define(frozen=True, slots=True)
class Random:
    """
    Opaque nonce token.

    Two randoms are the same nonce exactly when they were declared with the
    same label.
    """

    label: str = field(validator=_label_validator)

    def __str__(self) -> str:
        return self.label


@attrs.define(frozen=True, slots=True)
class DomainParameter:
    """Opaque identifier for the elliptic-curve domain in use."""

    label: str = field(validator=_label_validator)

    def __str__(self) -> str:
        return self.label


# =============================================================================
# DERIVED GROUP ELEMENTS
# =============================================================================


@attrs.define(frozen=True, slots=True)
class MapPoint:
    """
    Generator point mapped from a nonce on a domain.

    Injective: equal iff seed and domain are equal.
    """

    seed: Random = field(validator=validators.instance_of(Random))
    domain: DomainParameter = field(validator=validators.instance_of(DomainParameter))

    def __str__(self) -> str:
        return f"mp({self.seed}, {self.domain})"


@attrs.define(frozen=True, slots=True)
class Expo:
    """Diffie-Hellman public value: a random exponent applied to a base point."""

    exponent: Random = field(validator=validators.instance_of(Random))
    base: MapPoint = field(validator=validators.instance_of(MapPoint))

    def __str__(self) -> str:
        return f"expo({self.exponent}, {self.base})"


@attrs.define(frozen=True, slots=True, eq=False)
class Hash:
    """
    Shared key derived from a local secret and the peer's public value.

    hash(r, expo(r', g)) and hash(r', expo(r, g)) are the same key: each side
    raises the other's public value to its own secret. Equality is therefore
    either componentwise or crossed:

        secret == other.expo.exponent
        and other.secret == expo.exponent
        and expo.base == other.expo.base

    The hash is taken over the unordered pair of randoms plus the base point,
    which is constant on both clauses.
    """

    secret: Random = field(validator=validators.instance_of(Random))
    expo: Expo = field(validator=validators.instance_of(Expo))

    def canonical_form(self) -> Tuple[FrozenSet[Random], MapPoint]:
        """Representation shared by all Hash terms equal to this one."""
        return frozenset((self.secret, self.expo.exponent)), self.expo.base

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Hash):
            return NotImplemented
        if self.secret == other.secret and self.expo == other.expo:
            return True
        return (
            self.secret == other.expo.exponent
            and other.secret == self.expo.exponent
            and self.expo.base == other.expo.base
        )

    def __hash__(self) -> int:
        return hash(self.canonical_form())

    def __str__(self) -> str:
        return f"hash({self.secret}, {self.expo})"


# =============================================================================
# CIPHERTEXTS
# =============================================================================


@attrs.define(frozen=True, slots=True)
class Cipher1:
    """Message-1 payload: the nonce encrypted under the password."""

    nonce: Random = field(validator=validators.instance_of(Random))
    domain: DomainParameter = field(validator=validators.instance_of(DomainParameter))

    def __str__(self) -> str:
        return f"c1({self.nonce}, {self.domain})"


@attrs.define(frozen=True, slots=True)
class Cipher3:
    """
    Authentication token of messages 3 to 5: a MAC over the peer's public
    value and the domain, keyed with the derived session key.

    Key comparison goes through Hash equality, so the MACs two peers compute
    from their own views of the same agreement compare equal.
    """

    key: Hash = field(validator=validators.instance_of(Hash))
    expo: Expo = field(validator=validators.instance_of(Expo))
    domain: DomainParameter = field(validator=validators.instance_of(DomainParameter))

    def __str__(self) -> str:
        return f"mac({self.key}, {self.expo}, {self.domain})"


# =============================================================================
# MESSAGES
# =============================================================================


@attrs.define(frozen=True, slots=True)
class Message:
    """
    Envelope shared by the three message shapes.

    creator is who actually built the message; sender and receiver are the
    claimed identities on the wire.

    INVARIANT: sender == creator unless creator is the intruder
    """

    creator: Principal = field(validator=validators.instance_of(Principal))
    sender: Principal = field(validator=validators.instance_of(Principal))
    receiver: Principal = field(validator=validators.instance_of(Principal))

    def __attrs_post_init__(self) -> None:
        if self.sender != self.creator and not self.creator.is_intruder:
            raise ValueError(
                f"Only the intruder may forge a sender: "
                f"creator={self.creator}, sender={self.sender}"
            )

    @property
    def payload(self) -> Any:
        raise NotImplementedError

    @property
    def is_forged(self) -> bool:
        """True when the intruder built this message."""
        return self.creator.is_intruder

    def _envelope(self) -> str:
        return f"{self.creator}: {self.sender} -> {self.receiver}"


@attrs.define(frozen=True, slots=True)
class Message1(Message):
    cipher1: Cipher1 = field(kw_only=True, validator=validators.instance_of(Cipher1))

    @property
    def payload(self) -> Cipher1:
        return self.cipher1

    def __str__(self) -> str:
        return f"m1[{self._envelope()}]({self.cipher1})"


@attrs.define(frozen=True, slots=True)
class Message2(Message):
    expo: Expo = field(kw_only=True, validator=validators.instance_of(Expo))

    @property
    def payload(self) -> Expo:
        return self.expo

    def __str__(self) -> str:
        return f"m2[{self._envelope()}]({self.expo})"


@attrs.define(frozen=True, slots=True)
class Message3(Message):
    cipher3: Cipher3 = field(kw_only=True, validator=validators.instance_of(Cipher3))

    @property
    def payload(self) -> Cipher3:
        return self.cipher3

    def __str__(self) -> str:
        return f"m3[{self._envelope()}]({self.cipher3})"


# =============================================================================
# HELPERS
# =============================================================================


def terms_equal(left: Any, right: Any) -> bool:
    """
    Equality predicate over any two terms.

    Terms of different types are never equal.
    """
    if type(left) is not type(right):
        return False
    return bool(left == right)


def shared_key(secret: Random, peer_exponent: Random, base: MapPoint) -> Hash:
    """Key a principal holding `secret` derives from the peer's public value."""
    return Hash(secret, Expo(peer_exponent, base))
