"""Immutable description of a lepton-nucleon interaction.

An `Interaction` bundles everything a cross section algorithm needs to know: the
`InitialState` (probe and `Target`), the `ProcessInfo`, the `Kinematics` at which the
cross section is to be evaluated, an `ExclusiveTag` for the produced resonance, and a
set of `InteractionFlag` switches. All classes are frozen, so no algorithm can modify
an interaction while evaluating it. Use :meth:`Interaction.with_kinematics` and
:meth:`Interaction.with_flags` to create modified copies.
"""

from __future__ import annotations

import math
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING

import attrs
from attrs import field, frozen
from attrs.validators import ge, instance_of, optional

from resxsec import pdg

if TYPE_CHECKING:
    from resxsec.resonance import Resonance


class RefFrame(Enum):
    LAB = auto()
    STRUCK_NUCLEON_REST = auto()


class InteractionType(Enum):
    EM = auto()
    WEAK_CC = auto()
    WEAK_NC = auto()


class ScatteringType(Enum):
    QUASI_ELASTIC = auto()
    RESONANT = auto()
    DEEP_INELASTIC = auto()
    COHERENT = auto()


class InteractionFlag(Flag):
    """Switches that change how a cross section algorithm treats an `Interaction`."""

    NONE = 0
    SKIP_PROCESS_CHECK = auto()
    SKIP_KINEMATICS_CHECK = auto()
    ASSUME_FREE_NUCLEON = auto()


def _check_struck_nucleon(instance: Target, _: attrs.Attribute, value: int | None) -> None:
    if value is None:
        return
    if pdg.is_proton(value) and instance.Z == 0:
        msg = f"Target with Z=0 cannot have a struck proton (N={instance.N})"
        raise ValueError(msg)
    if pdg.is_neutron(value) and instance.N == 0:
        msg = f"Target with N=0 cannot have a struck neutron (Z={instance.Z})"
        raise ValueError(msg)


@frozen
class Target:
    """Nuclear target with the nucleon that takes part in the interaction.

    The struck nucleon mass defaults to the on-shell mass of the struck nucleon.
    """

    Z: int = field(validator=[instance_of(int), ge(0)])  # noqa: N815
    N: int = field(validator=[instance_of(int), ge(0)])  # noqa: N815
    struck_nucleon_pdg: int | None = field(
        default=None, validator=[optional(instance_of(int)), _check_struck_nucleon]
    )
    struck_nucleon_mass: float = field(converter=float)

    @struck_nucleon_mass.default
    def _default_nucleon_mass(self) -> float:
        if self.struck_nucleon_pdg is None:
            return 0.0
        return pdg.mass(self.struck_nucleon_pdg)

    def __attrs_post_init__(self) -> None:
        if self.A == 0:
            msg = "Target has to contain at least one nucleon"
            raise ValueError(msg)

    @property
    def A(self) -> int:  # noqa: N802
        return self.Z + self.N

    @property
    def pdg(self) -> int:
        return pdg.ion_pdg_code(self.Z, self.A)

    @property
    def is_free_nucleon(self) -> bool:
        return self.A == 1


@frozen
class InitialState:
    """Probe with its energy in the lab frame and the `Target` it hits.

    The probe moves along the :math:`z`-axis. The struck nucleon can carry a
    (Fermi) momentum in the lab frame, in which case the probe energy in the
    struck-nucleon rest frame differs from the lab energy.
    """

    probe_pdg: int = field(validator=instance_of(int))
    probe_energy: float = field(converter=float)
    target: Target = field(validator=instance_of(Target))
    struck_nucleon_momentum: tuple[float, float, float] = field(
        default=(0.0, 0.0, 0.0), converter=lambda p: tuple(float(x) for x in p)
    )

    @probe_energy.validator
    def __check_energy(self, _: attrs.Attribute, value: float) -> None:
        if value <= 0.0:
            msg = f"Probe energy has to be positive, not {value}"
            raise ValueError(msg)

    def probe_energy_in(self, frame: RefFrame) -> float:
        if frame is RefFrame.LAB:
            return self.probe_energy
        if frame is RefFrame.STRUCK_NUCLEON_REST:
            px, py, pz = self.struck_nucleon_momentum
            if px == py == pz == 0.0:
                return self.probe_energy
            mass = self.target.struck_nucleon_mass
            energy = math.sqrt(mass**2 + px**2 + py**2 + pz**2)
            return self.probe_energy * (energy - pz) / mass
        msg = f"No probe energy defined for reference frame {frame}"
        raise NotImplementedError(msg)


@frozen
class ProcessInfo:
    interaction_type: InteractionType = field(validator=instance_of(InteractionType))
    scattering_type: ScatteringType = field(validator=instance_of(ScatteringType))

    @property
    def is_weak(self) -> bool:
        return self.interaction_type in {InteractionType.WEAK_CC, InteractionType.WEAK_NC}

    @property
    def is_weak_cc(self) -> bool:
        return self.interaction_type is InteractionType.WEAK_CC

    @property
    def is_weak_nc(self) -> bool:
        return self.interaction_type is InteractionType.WEAK_NC

    @property
    def is_resonant(self) -> bool:
        return self.scattering_type is ScatteringType.RESONANT


@frozen
class Kinematics:
    """Hadronic invariant mass :math:`W` and squared four-momentum transfer :math:`q^2`.

    The momentum transfer is space-like, so :math:`q^2 \\leq 0` and
    :math:`Q^2 = -q^2 \\geq 0`.
    """

    W: float = field(converter=float)  # noqa: N815
    q2: float = field(converter=float)

    @property
    def Q2(self) -> float:  # noqa: N802
        return -self.q2


@frozen
class ExclusiveTag:
    resonance: Resonance | None = None

    @property
    def known_resonance(self) -> bool:
        return self.resonance is not None


@frozen
class Interaction:
    initial_state: InitialState = field(validator=instance_of(InitialState))
    process_info: ProcessInfo = field(validator=instance_of(ProcessInfo))
    kinematics: Kinematics = field(validator=instance_of(Kinematics))
    exclusive_tag: ExclusiveTag = field(
        factory=ExclusiveTag, validator=instance_of(ExclusiveTag)
    )
    flags: InteractionFlag = field(
        default=InteractionFlag.NONE, validator=instance_of(InteractionFlag)
    )

    @classmethod
    def res_cc(  # noqa: PLR0917
        cls,
        target: Target,
        probe_pdg: int,
        probe_energy: float,
        resonance: Resonance | None,
        kinematics: Kinematics,
        flags: InteractionFlag = InteractionFlag.NONE,
    ) -> Interaction:
        """Create a charged-current resonance-production interaction."""
        return cls._create_res(
            InteractionType.WEAK_CC, target, probe_pdg, probe_energy, resonance,
            kinematics, flags,
        )  # fmt: skip

    @classmethod
    def res_nc(  # noqa: PLR0917
        cls,
        target: Target,
        probe_pdg: int,
        probe_energy: float,
        resonance: Resonance | None,
        kinematics: Kinematics,
        flags: InteractionFlag = InteractionFlag.NONE,
    ) -> Interaction:
        """Create a neutral-current resonance-production interaction."""
        return cls._create_res(
            InteractionType.WEAK_NC, target, probe_pdg, probe_energy, resonance,
            kinematics, flags,
        )  # fmt: skip

    @classmethod
    def _create_res(  # noqa: PLR0913, PLR0917
        cls,
        interaction_type: InteractionType,
        target: Target,
        probe_pdg: int,
        probe_energy: float,
        resonance: Resonance | None,
        kinematics: Kinematics,
        flags: InteractionFlag,
    ) -> Interaction:
        return cls(
            initial_state=InitialState(probe_pdg, probe_energy, target),
            process_info=ProcessInfo(interaction_type, ScatteringType.RESONANT),
            kinematics=kinematics,
            exclusive_tag=ExclusiveTag(resonance),
            flags=flags,
        )

    def test_flag(self, flag: InteractionFlag) -> bool:
        return flag in self.flags

    def with_flags(self, flags: InteractionFlag) -> Interaction:
        return attrs.evolve(self, flags=self.flags | flags)

    def with_kinematics(self, W: float, q2: float) -> Interaction:  # noqa: N803
        return attrs.evolve(self, kinematics=Kinematics(W, q2))

    def __str__(self) -> str:
        init_state = self.initial_state
        target = init_state.target
        proc = self.process_info
        resonance = self.exclusive_tag.resonance
        return ";".join([
            f"nu:{init_state.probe_pdg}",
            f"tgt:{target.pdg}",
            f"N:{target.struck_nucleon_pdg}",
            f"proc:{proc.interaction_type.name},{proc.scattering_type.name}",
            f"res:{'unknown' if resonance is None else resonance.value}",
        ])
