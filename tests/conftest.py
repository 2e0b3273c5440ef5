"""
Pytest configuration and shared fixtures for PACEModeler tests.
"""

import attrs
import pytest

from pacemodeler.core.types import (
    INTRUDER,
    Cipher1,
    DomainParameter,
    Message1,
    Message2,
    Principal,
    Random,
)
from pacemodeler.pace.honest import sdm1, sdm2, sdm3
from pacemodeler.pace.state import KnowledgeState, init
from pacemodeler.search.config import SearchConfig, Universe


# =============================================================================
# PRINCIPAL FIXTURES
# =============================================================================


@pytest.fixture
def chip() -> Principal:
    """Honest chip."""
    return Principal("chip")


@pytest.fixture
def terminal() -> Principal:
    """Honest terminal."""
    return Principal("terminal")


@pytest.fixture
def intruder() -> Principal:
    return INTRUDER


# =============================================================================
# TOKEN FIXTURES
# =============================================================================


@pytest.fixture
def r1() -> Random:
    return Random("r1")


@pytest.fixture
def r2() -> Random:
    return Random("r2")


@pytest.fixture
def r3() -> Random:
    return Random("r3")


@pytest.fixture
def d1() -> DomainParameter:
    return DomainParameter("d1")


# =============================================================================
# STATE FIXTURES
# =============================================================================


@attrs.define(frozen=True)
class HonestRun:
    """Every intermediate state and message of a complete honest run."""

    after_m1: KnowledgeState
    after_chip_m2: KnowledgeState
    after_terminal_m2: KnowledgeState
    final: KnowledgeState
    message1: Message1
    chip_message2: Message2
    terminal_message2: Message2


@pytest.fixture
def empty_state() -> KnowledgeState:
    return init()


@pytest.fixture
def scenario_a_state(chip, terminal, r1, d1) -> KnowledgeState:
    """Chip has sent message 1 to the terminal."""
    return sdm1(init(), chip, terminal, r1, d1)


@pytest.fixture
def honest_run(chip, terminal, r1, r2, r3, d1) -> HonestRun:
    """
    Chip and terminal run the handshake to the chip's message 3.

    The chip sends message 1 with nonce r1 and its public value over r2; the
    terminal answers with its public value over r3.
    """
    after_m1 = sdm1(init(), chip, terminal, r1, d1)
    message1 = Message1(chip, chip, terminal, cipher1=Cipher1(r1, d1))
    after_chip_m2 = sdm2(after_m1, chip, terminal, r2, message1)
    chip_message2 = next(
        m for m in after_chip_m2.messages_of(Message2) if m.creator == chip
    )
    after_terminal_m2 = sdm2(after_chip_m2, terminal, chip, r3, message1)
    terminal_message2 = next(
        m for m in after_terminal_m2.messages_of(Message2) if m.creator == terminal
    )
    final = sdm3(
        after_terminal_m2, chip, terminal, message1, terminal_message2, chip_message2
    )
    return HonestRun(
        after_m1=after_m1,
        after_chip_m2=after_chip_m2,
        after_terminal_m2=after_terminal_m2,
        final=final,
        message1=message1,
        chip_message2=chip_message2,
        terminal_message2=terminal_message2,
    )


# =============================================================================
# SEARCH FIXTURES
# =============================================================================


@pytest.fixture
def small_universe() -> Universe:
    """Chip, terminal, three randoms, one domain."""
    return Universe.build(principals=("chip", "terminal"), n_randoms=3, domains=("d1",))


@pytest.fixture
def shallow_config() -> SearchConfig:
    return SearchConfig(max_depth=3, max_states=50_000, check_monotonicity=True)


# =============================================================================
# PYTEST MARKERS
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
