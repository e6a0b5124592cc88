# pylint: disable=redefined-outer-name
from __future__ import annotations

import logging

import pytest

from resxsec import pdg
from resxsec.algorithm import AlgorithmFactory
from resxsec.config import ConfigPool
from resxsec.interaction import Interaction, InteractionFlag, Kinematics, Target
from resxsec.resonance import Resonance

logging.getLogger().setLevel(level=logging.ERROR)


@pytest.fixture(scope="session")
def config_pool() -> ConfigPool:
    return ConfigPool.default()


@pytest.fixture
def factory(config_pool: ConfigPool) -> AlgorithmFactory:
    """Fresh factory, so that stubs adopted by one test do not leak into others."""
    return AlgorithmFactory(config_pool)


@pytest.fixture(scope="session")
def free_proton() -> Target:
    return Target(Z=1, N=0, struck_nucleon_pdg=pdg.PROTON)


@pytest.fixture(scope="session")
def carbon_proton() -> Target:
    return Target(Z=6, N=6, struck_nucleon_pdg=pdg.PROTON)


@pytest.fixture(scope="session")
def cc_delta(free_proton: Target) -> Interaction:
    """Muon-neutrino CC production of a Delta(1232) at a physical point."""
    return Interaction.res_cc(
        free_proton,
        probe_pdg=pdg.MUON_NEUTRINO,
        probe_energy=2.0,
        resonance=Resonance.P33_1232,
        kinematics=Kinematics(W=1.232, q2=-0.5),
        flags=InteractionFlag.ASSUME_FREE_NUCLEON,
    )
