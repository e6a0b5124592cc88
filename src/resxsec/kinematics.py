"""Kinematic limits and phase-space transformations of resonance production.

The native variables of the resonance-production cross section are the invariant
mass :math:`W` of the hadronic system and the squared momentum transfer
:math:`Q^2=-q^2`. Other choices of variables are parametrized in terms of
:math:`(W, Q^2)` with `sympy`, so that the Jacobian of the transformation follows from
:meth:`sympy.Matrix.jacobian <sympy.matrices.matrixbase.MatrixBase.jacobian>`.
"""

from __future__ import annotations

import logging
import math
from enum import Enum, auto
from functools import cache
from typing import TYPE_CHECKING, Callable

import sympy as sp
from attrs import field, frozen

from resxsec import pdg
from resxsec.interaction import RefFrame

if TYPE_CHECKING:
    from resxsec.interaction import Interaction

_LOGGER = logging.getLogger(__name__)

MIN_Q2 = 1e-6
"""Lower limit on :math:`Q^2` in :math:`\\mathrm{GeV}^2`, so that :math:`q^2 < 0`."""


@frozen
class Range1D:
    """Closed interval :math:`[\\min, \\max]`.

    >>> Range1D(1.0, 2.0).contains(2.0)
    True
    """

    min: float = field(converter=float)
    max: float = field(converter=float)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @property
    def is_empty(self) -> bool:
        return self.max < self.min


class KineVar(Enum):
    W = auto()
    Q2 = auto()


class KinePhaseSpace(Enum):
    """Sets of variables in which a differential cross section can be expressed."""

    W_Q2 = auto()
    """Native variables :math:`(W, Q^2)`."""
    W_q2 = auto()  # noqa: N815
    """:math:`(W, q^2)` with :math:`q^2 = -Q^2`."""
    W_LOGQ2 = auto()
    """:math:`(W, \\ln Q^2)`."""
    X_Y = auto()
    """Bjorken :math:`x` and inelasticity :math:`y`."""


NATIVE_PHASE_SPACE = KinePhaseSpace.W_Q2


def _lepton_mass(interaction: Interaction) -> float:
    if interaction.process_info.is_weak_cc:
        return pdg.mass(pdg.charged_lepton(interaction.initial_state.probe_pdg))
    return 0.0


def energy_threshold(interaction: Interaction) -> float:
    r"""Probe energy above which a pion can be produced.

    .. math::
        E_\mathrm{thr} = \frac{(m_\ell + M + m_\pi)^2 - M^2}{2M}

    with :math:`M` the mass of the struck nucleon and :math:`m_\ell` the mass of the
    outgoing lepton (zero for neutral currents).
    """
    nucleon_mass = interaction.initial_state.target.struck_nucleon_mass
    lepton_mass = _lepton_mass(interaction)
    total_mass = lepton_mass + nucleon_mass + pdg.PION_MASS
    return (total_mass**2 - nucleon_mass**2) / (2 * nucleon_mass)


def kine_range(interaction: Interaction, variable: KineVar) -> Range1D:
    """Physically allowed range of a kinematic variable.

    The :math:`Q^2` range is evaluated at the :math:`W` of the interaction and starts
    at `MIN_Q2` or above.
    """
    init_state = interaction.initial_state
    nucleon_mass = init_state.target.struck_nucleon_mass
    energy = init_state.probe_energy_in(RefFrame.STRUCK_NUCLEON_REST)
    lepton_mass = _lepton_mass(interaction)
    s = nucleon_mass**2 + 2 * nucleon_mass * energy
    w_range = Range1D(nucleon_mass + pdg.PION_MASS, math.sqrt(s) - lepton_mass)
    if variable is KineVar.W:
        return w_range
    if variable is KineVar.Q2:
        return _q2_range(s, nucleon_mass, lepton_mass, interaction.kinematics.W)
    msg = f"No kinematic range defined for {variable}"
    raise NotImplementedError(msg)


def _q2_range(s: float, nucleon_mass: float, lepton_mass: float, W: float) -> Range1D:  # noqa: N803
    lepton_mass2 = lepton_mass**2
    aux1 = s + lepton_mass2 - W**2
    aux2 = math.sqrt(max(aux1**2 - 4 * s * lepton_mass2, 0.0))
    aux_c = 0.5 * (s - nucleon_mass**2) / s
    return Range1D(
        min=max(-lepton_mass2 + aux_c * (aux1 - aux2), MIN_Q2),
        max=-lepton_mass2 + aux_c * (aux1 + aux2),
    )


_W, _Q2 = sp.symbols("W Q2", real=True)
_M, _E = sp.symbols("M E", positive=True)


@cache
def formulate_parametrization(
    phase_space: KinePhaseSpace,
) -> tuple[tuple[sp.Symbol, sp.Symbol], sp.Matrix]:
    """Express :math:`(W, Q^2)` in terms of the variables of a phase space.

    Returns the variables of the phase space and a column matrix with the
    expressions for :math:`W` and :math:`Q^2`. These may depend on the nucleon mass
    :math:`M` and the probe energy :math:`E`.
    """
    if phase_space is KinePhaseSpace.W_Q2:
        return (_W, _Q2), sp.Matrix([_W, _Q2])
    if phase_space is KinePhaseSpace.W_q2:
        q2 = sp.Symbol("q2", real=True)
        return (_W, q2), sp.Matrix([_W, -q2])
    if phase_space is KinePhaseSpace.W_LOGQ2:
        log_q2 = sp.Symbol("logQ2", real=True)
        return (_W, log_q2), sp.Matrix([_W, sp.exp(log_q2)])
    if phase_space is KinePhaseSpace.X_Y:
        x, y = sp.symbols("x y", positive=True)
        w_expr = sp.sqrt(_M**2 + 2 * _M * y * _E * (1 - x))
        q2_expr = 2 * _M * x * y * _E
        return (x, y), sp.Matrix([w_expr, q2_expr])
    msg = f"No parametrization for phase space {phase_space.name}"
    raise NotImplementedError(msg)


@cache
def _get_jacobian_function(phase_space: KinePhaseSpace) -> Callable[..., float]:
    variables, parametrization = formulate_parametrization(phase_space)
    determinant = parametrization.jacobian(variables).det()
    _LOGGER.debug(f"Jacobian of {phase_space.name}: {determinant}")
    return sp.lambdify((*variables, _M, _E), sp.Abs(determinant), "math")


def _to_phase_space(
    phase_space: KinePhaseSpace,
    W: float,  # noqa: N803
    Q2: float,  # noqa: N803
    nucleon_mass: float,
    energy: float,
) -> tuple[float, float]:
    if phase_space is KinePhaseSpace.W_Q2:
        return W, Q2
    if phase_space is KinePhaseSpace.W_q2:
        return W, -Q2
    if phase_space is KinePhaseSpace.W_LOGQ2:
        return W, math.log(Q2)
    if phase_space is KinePhaseSpace.X_Y:
        nu = (W**2 - nucleon_mass**2 + Q2) / (2 * nucleon_mass)
        return Q2 / (2 * nucleon_mass * nu), nu / energy
    msg = f"No parametrization for phase space {phase_space.name}"
    raise NotImplementedError(msg)


def jacobian(
    interaction: Interaction,
    from_space: KinePhaseSpace,
    to_space: KinePhaseSpace,
) -> float:
    """Jacobian for transforming a differential cross section between phase spaces.

    A cross section :math:`\\mathrm{d}^2\\sigma` differential in the variables of
    :code:`from_space` is multiplied with the returned factor to make it
    differential in the variables of :code:`to_space`. Only transformations from or
    into the `NATIVE_PHASE_SPACE` are supported.
    """
    if from_space is to_space:
        return 1.0
    if from_space is NATIVE_PHASE_SPACE:
        return _evaluate_jacobian(interaction, to_space)
    if to_space is NATIVE_PHASE_SPACE:
        return 1.0 / _evaluate_jacobian(interaction, from_space)
    msg = f"Cannot transform phase space {from_space.name} to {to_space.name}"
    raise NotImplementedError(msg)


def _evaluate_jacobian(interaction: Interaction, phase_space: KinePhaseSpace) -> float:
    init_state = interaction.initial_state
    nucleon_mass = init_state.target.struck_nucleon_mass
    energy = init_state.probe_energy_in(RefFrame.STRUCK_NUCLEON_REST)
    kinematics = interaction.kinematics
    variables = _to_phase_space(
        phase_space, kinematics.W, kinematics.Q2, nucleon_mass, energy
    )
    func = _get_jacobian_function(phase_space)
    return float(func(*variables, nucleon_mass, energy))
