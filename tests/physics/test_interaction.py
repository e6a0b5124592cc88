from __future__ import annotations

import attrs
import pytest

from resxsec import pdg
from resxsec.interaction import (
    ExclusiveTag,
    InitialState,
    Interaction,
    InteractionFlag,
    InteractionType,
    Kinematics,
    ProcessInfo,
    RefFrame,
    ScatteringType,
    Target,
)
from resxsec.resonance import Resonance


class TestTarget:
    def test_properties(self):
        target = Target(Z=6, N=6, struck_nucleon_pdg=pdg.NEUTRON)
        assert target.A == 12
        assert target.pdg == 1000060120
        assert not target.is_free_nucleon
        assert target.struck_nucleon_mass == pdg.NEUTRON_MASS

    def test_explicit_nucleon_mass(self):
        target = Target(1, 0, pdg.PROTON, struck_nucleon_mass=0.939)
        assert target.struck_nucleon_mass == 0.939
        assert target.is_free_nucleon

    @pytest.mark.parametrize(
        ("z", "n", "nucleon"),
        [
            (0, 0, None),
            (-1, 2, None),
            (0, 1, pdg.PROTON),
            (1, 0, pdg.NEUTRON),
        ],
    )
    def test_invalid(self, z: int, n: int, nucleon: int | None):
        with pytest.raises(ValueError):  # noqa: PT011
            Target(z, n, nucleon)


class TestInitialState:
    def test_energy_in_nucleon_rest_frame(self, free_proton: Target):
        init_state = InitialState(pdg.MUON_NEUTRINO, 1.0, free_proton)
        assert init_state.probe_energy_in(RefFrame.LAB) == 1.0
        assert init_state.probe_energy_in(RefFrame.STRUCK_NUCLEON_REST) == 1.0

    def test_moving_nucleon(self, free_proton: Target):
        # nucleon moving along the probe direction sees a smaller energy
        init_state = InitialState(
            pdg.MUON_NEUTRINO,
            1.0,
            free_proton,
            struck_nucleon_momentum=(0.0, 0.0, 0.2),
        )
        mass = free_proton.struck_nucleon_mass
        expected = (mass**2 + 0.04) ** 0.5 - 0.2
        expected /= mass
        assert init_state.probe_energy_in(RefFrame.LAB) == 1.0
        assert init_state.probe_energy_in(
            RefFrame.STRUCK_NUCLEON_REST
        ) == pytest.approx(expected)
        assert init_state.probe_energy_in(RefFrame.STRUCK_NUCLEON_REST) < 1.0

    def test_invalid_energy(self, free_proton: Target):
        with pytest.raises(ValueError, match="positive"):
            InitialState(pdg.MUON_NEUTRINO, 0.0, free_proton)


def test_process_info():
    proc = ProcessInfo(InteractionType.WEAK_NC, ScatteringType.RESONANT)
    assert proc.is_weak
    assert proc.is_weak_nc
    assert not proc.is_weak_cc
    assert proc.is_resonant
    proc = ProcessInfo(InteractionType.EM, ScatteringType.DEEP_INELASTIC)
    assert not proc.is_weak
    assert not proc.is_resonant


def test_exclusive_tag():
    assert not ExclusiveTag().known_resonance
    assert ExclusiveTag(Resonance.P33_1232).known_resonance


class TestInteraction:
    def test_res_cc(self, cc_delta: Interaction):
        assert cc_delta.process_info.is_weak_cc
        assert cc_delta.process_info.is_resonant
        assert cc_delta.exclusive_tag.resonance is Resonance.P33_1232
        assert cc_delta.kinematics.Q2 == 0.5
        assert cc_delta.test_flag(InteractionFlag.ASSUME_FREE_NUCLEON)
        assert not cc_delta.test_flag(InteractionFlag.SKIP_PROCESS_CHECK)

    def test_res_nc(self, carbon_proton: Target):
        interaction = Interaction.res_nc(
            carbon_proton,
            pdg.ELECTRON_NEUTRINO,
            1.5,
            Resonance.S11_1535,
            Kinematics(1.5, -0.2),
        )
        assert interaction.process_info.is_weak_nc
        assert interaction.flags == InteractionFlag.NONE

    def test_modified_copies(self, cc_delta: Interaction):
        flagged = cc_delta.with_flags(InteractionFlag.SKIP_KINEMATICS_CHECK)
        assert flagged.test_flag(InteractionFlag.SKIP_KINEMATICS_CHECK)
        assert flagged.test_flag(InteractionFlag.ASSUME_FREE_NUCLEON)
        assert not cc_delta.test_flag(InteractionFlag.SKIP_KINEMATICS_CHECK)
        moved = cc_delta.with_kinematics(W=1.4, q2=-0.1)
        assert moved.kinematics == Kinematics(1.4, -0.1)
        assert cc_delta.kinematics == Kinematics(1.232, -0.5)

    def test_immutable(self, cc_delta: Interaction):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            cc_delta.flags = InteractionFlag.NONE  # type: ignore[misc]

    def test_str(self, cc_delta: Interaction):
        assert str(cc_delta) == (
            "nu:14;tgt:1000010010;N:2212;proc:WEAK_CC,RESONANT;res:P33(1232)"
        )
