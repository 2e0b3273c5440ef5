"""
Unit tests for pacemodeler.core.types module.

Tests term constructors, projections, validators and equality.
"""

import pytest

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
    shared_key,
    terms_equal,
)


class TestPrincipal:
    """Tests for Principal type."""

    def test_principal_creation(self):
        """Test basic principal creation."""
        principal = Principal("chip")
        assert principal.name == "chip"
        assert str(principal) == "chip"

    def test_principal_equality(self):
        """Test principal equality is identity of names."""
        assert Principal("chip") == Principal("chip")
        assert Principal("chip") != Principal("terminal")

    def test_empty_name_rejected(self):
        """Test principal requires a non-empty name."""
        with pytest.raises(ValueError):
            Principal("")

    def test_intruder_does_not_know_password(self):
        """Test closed-world password assumption."""
        assert INTRUDER.is_intruder
        assert not INTRUDER.knows_password
        assert Principal("intruder") == INTRUDER

    def test_honest_principal_knows_password(self, chip, terminal):
        assert chip.knows_password
        assert terminal.knows_password
        assert not chip.is_intruder


class TestOpaqueTokens:
    """Tests for Random and DomainParameter."""

    def test_random_equality_by_label(self):
        assert Random("r1") == Random("r1")
        assert Random("r1") != Random("r2")

    def test_random_hashable(self):
        randoms = {Random("r1"), Random("r1"), Random("r2")}
        assert len(randoms) == 2

    def test_random_requires_string(self):
        with pytest.raises(TypeError):
            Random(1)

    def test_domain_parameter_equality(self):
        assert DomainParameter("d1") == DomainParameter("d1")
        assert DomainParameter("d1") != DomainParameter("d2")

    def test_random_and_domain_never_equal(self):
        """Test tokens of different types with the same label differ."""
        assert not terms_equal(Random("x"), DomainParameter("x"))


class TestDerivedTerms:
    """Tests for MapPoint, Expo and Cipher1."""

    def test_map_point_projections(self, r1, d1):
        point = MapPoint(r1, d1)
        assert point.seed == r1
        assert point.domain == d1

    def test_map_point_injective(self, r1, r2, d1):
        assert MapPoint(r1, d1) == MapPoint(r1, d1)
        assert MapPoint(r1, d1) != MapPoint(r2, d1)
        assert MapPoint(r1, d1) != MapPoint(r1, DomainParameter("d2"))

    def test_expo_projections(self, r1, r2, d1):
        expo = Expo(r2, MapPoint(r1, d1))
        assert expo.exponent == r2
        assert expo.base == MapPoint(r1, d1)

    def test_expo_componentwise_equality(self, r1, r2, d1):
        assert Expo(r2, MapPoint(r1, d1)) == Expo(r2, MapPoint(r1, d1))
        assert Expo(r2, MapPoint(r1, d1)) != Expo(r1, MapPoint(r2, d1))

    def test_expo_rejects_wrong_component(self, r1, d1):
        with pytest.raises(TypeError):
            Expo(r1, r1)

    def test_cipher1_equality(self, r1, r2, d1):
        assert Cipher1(r1, d1) == Cipher1(r1, d1)
        assert Cipher1(r1, d1) != Cipher1(r2, d1)

    def test_str_rendering(self, r1, r2, d1):
        assert str(Expo(r2, MapPoint(r1, d1))) == "expo(r2, mp(r1, d1))"


class TestHash:
    """Tests for Hash key symmetry."""

    def test_direct_equality(self, r1, r2, d1):
        expo = Expo(r2, MapPoint(r1, d1))
        assert Hash(r1, expo) == Hash(r1, expo)

    def test_cross_equality(self, r1, r2, r3, d1):
        """Both Diffie-Hellman participants derive the same key."""
        base = MapPoint(r1, d1)
        chip_view = Hash(r2, Expo(r3, base))
        terminal_view = Hash(r3, Expo(r2, base))
        assert chip_view == terminal_view
        assert terminal_view == chip_view

    def test_cross_equality_hash_consistent(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        chip_view = Hash(r2, Expo(r3, base))
        terminal_view = Hash(r3, Expo(r2, base))
        assert hash(chip_view) == hash(terminal_view)
        assert chip_view.canonical_form() == terminal_view.canonical_form()
        assert terminal_view in {chip_view}

    def test_cross_requires_same_base(self, r1, r2, r3, d1):
        chip_view = Hash(r2, Expo(r3, MapPoint(r1, d1)))
        other = Hash(r3, Expo(r2, MapPoint(r2, d1)))
        assert chip_view != other

    def test_cross_requires_both_randoms(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        assert Hash(r2, Expo(r3, base)) != Hash(r1, Expo(r2, base))

    def test_not_structural_equality(self, r1, r2, r3, d1):
        """Cross-matched keys are equal although their fields differ."""
        base = MapPoint(r1, d1)
        left = Hash(r2, Expo(r3, base))
        right = Hash(r3, Expo(r2, base))
        assert left.secret != right.secret
        assert left.expo != right.expo
        assert left == right

    def test_symmetry_requires_shared_base(self, r1, r2, d1):
        """Swapped randoms over different generators are different keys."""
        left = Hash(r1, Expo(r2, MapPoint(r1, d1)))
        right = Hash(r2, Expo(r1, MapPoint(r2, d1)))
        assert left.expo.base != right.expo.base
        # Bases differ, so only the direct clause could apply
        assert (left == right) == (r1 == r2)

    def test_shared_key_helper(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        assert shared_key(r2, r3, base) == shared_key(r3, r2, base)

    def test_hash_not_equal_to_other_types(self, r1, r2, d1):
        key = Hash(r1, Expo(r2, MapPoint(r1, d1)))
        assert key != "hash"
        assert not terms_equal(key, Expo(r2, MapPoint(r1, d1)))


class TestCipher3:
    """Tests for Cipher3 equality through Hash."""

    def test_mac_equal_under_key_symmetry(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        peer_expo = Expo(r3, base)
        chip_mac = Cipher3(Hash(r2, peer_expo), peer_expo, d1)
        recomputed = Cipher3(Hash(r3, Expo(r2, base)), peer_expo, d1)
        assert chip_mac == recomputed
        assert hash(chip_mac) == hash(recomputed)

    def test_mac_differs_by_expo(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        key = Hash(r2, Expo(r3, base))
        assert Cipher3(key, Expo(r3, base), d1) != Cipher3(key, Expo(r2, base), d1)

    def test_mac_differs_by_domain(self, r1, r2, r3, d1):
        base = MapPoint(r1, d1)
        key = Hash(r2, Expo(r3, base))
        expo = Expo(r3, base)
        assert Cipher3(key, expo, d1) != Cipher3(key, expo, DomainParameter("d2"))


class TestMessages:
    """Tests for the three message shapes."""

    def test_message1_projections(self, chip, terminal, r1, d1):
        msg = Message1(chip, chip, terminal, cipher1=Cipher1(r1, d1))
        assert msg.creator == chip
        assert msg.sender == chip
        assert msg.receiver == terminal
        assert msg.cipher1 == Cipher1(r1, d1)
        assert msg.payload == msg.cipher1
        assert not msg.is_forged

    def test_componentwise_equality(self, chip, terminal, r1, d1):
        left = Message1(chip, chip, terminal, cipher1=Cipher1(r1, d1))
        right = Message1(chip, chip, terminal, cipher1=Cipher1(r1, d1))
        forged = Message1(INTRUDER, chip, terminal, cipher1=Cipher1(r1, d1))
        assert left == right
        assert left != forged

    def test_shapes_never_equal(self, chip, terminal, r1, r2, d1):
        expo = Expo(r2, MapPoint(r1, d1))
        m2 = Message2(chip, chip, terminal, expo=expo)
        m3 = Message3(
            chip, chip, terminal, cipher3=Cipher3(Hash(r1, expo), expo, d1)
        )
        m1 = Message1(chip, chip, terminal, cipher1=Cipher1(r1, d1))
        assert m1 != m2
        assert m2 != m3
        assert not terms_equal(m1, m3)

    def test_intruder_may_forge_sender(self, chip, terminal, r1, d1):
        msg = Message1(INTRUDER, chip, terminal, cipher1=Cipher1(r1, d1))
        assert msg.is_forged
        assert msg.sender == chip

    def test_honest_creator_cannot_forge_sender(self, chip, terminal, r1, d1):
        with pytest.raises(ValueError):
            Message1(terminal, chip, terminal, cipher1=Cipher1(r1, d1))

    def test_payload_type_enforced(self, chip, terminal, r1, d1):
        with pytest.raises(TypeError):
            Message2(chip, chip, terminal, expo=Cipher1(r1, d1))

    def test_str_rendering(self, chip, terminal, r1, d1):
        msg = Message1(INTRUDER, chip, terminal, cipher1=Cipher1(r1, d1))
        assert str(msg) == "m1[intruder: chip -> terminal](c1(r1, d1))"
