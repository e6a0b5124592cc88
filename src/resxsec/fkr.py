"""Feynman-Kislinger-Ravndal (FKR) parameters of the Rein-Sehgal model.

The relativistic harmonic-oscillator quark model of Feynman, Kislinger, and Ravndal
expresses the helicity amplitudes of all resonances in terms of a small set of
kinematic quantities: :math:`\\lambda`, the vector parameters :math:`T_V, R_V, S`, and
the axial parameters :math:`T_A, R_A, B, C`. These depend on the squared momentum
transfer :math:`q^2`, the invariant mass :math:`W`, the nucleon mass :math:`M`, the
oscillator level :math:`N` of the resonance, and the model constants :math:`\\zeta`,
:math:`\\Omega`, :math:`M_A`, and :math:`M_V`.

The parameters are formulated with `sympy` in :func:`formulate_fkr_parameters` and
converted to a numerical function once, see :class:`FKRCalculator`.
"""

from __future__ import annotations

import logging
import math
from functools import cache
from typing import Callable

import attrs
import sympy as sp
from attrs import field, frozen

_LOGGER = logging.getLogger(__name__)

FKR_SYMBOLS = sp.symbols("q2 W M N zeta Omega M_A2 M_V2", real=True)
"""Arguments of the expressions in :func:`formulate_fkr_parameters`, in order."""
_FKR_NAMES = ("lamda", "tv", "rv", "s", "ta", "ra", "b", "c")


@frozen
class FKRParameters:
    """FKR parameters at one kinematic point.

    The combinations :math:`T^\\pm = -(T_V \\pm T_A)` and
    :math:`R^\\pm = -(R_V \\pm R_A)` are the ones that enter the helicity amplitudes.
    """

    lamda: float
    tv: float
    rv: float
    s: float
    ta: float
    ra: float
    b: float
    c: float
    sin2_weinberg: float = 0.0

    @property
    def t(self) -> float:
        return self.tv

    @property
    def t_plus(self) -> float:
        return -(self.tv + self.ta)

    @property
    def t_minus(self) -> float:
        return -(self.tv - self.ta)

    @property
    def r(self) -> float:
        return self.rv

    @property
    def r_plus(self) -> float:
        return -(self.rv + self.ra)

    @property
    def r_minus(self) -> float:
        return -(self.rv - self.ra)

    def scale_vector(self, factor: float) -> FKRParameters:
        """Scale the vector-current parameters :math:`T_V, R_V, S`."""
        return attrs.evolve(
            self, tv=factor * self.tv, rv=factor * self.rv, s=factor * self.s
        )


@cache
def formulate_fkr_parameters() -> dict[str, sp.Expr]:
    r"""Formulate the FKR parameters as `sympy` expressions of `FKR_SYMBOLS`.

    The vector and axial form factors are dipoles, modified by the oscillator level
    :math:`N` of the resonance:

    .. math::
        G_V = \frac{\left(1-\frac{q^2}{4M^2}\right)^{1/2-N}}
                   {\left(1-\frac{q^2}{M_V^2}\right)^2}, \quad
        G_A = \frac{\left(1-\frac{q^2}{4M^2}\right)^{1/2-N}}
                   {\left(1-\frac{q^2}{M_A^2}\right)^2}.

    The momentum transfer :math:`|\vec q\,|` is taken in the resonance rest frame.
    """
    q2, W, M, N, zeta, omega, ma2, mv2 = FKR_SYMBOLS
    half = sp.Rational(1, 2)
    k = half * (W**2 - M**2) / M
    v = k - half * q2 / M
    q_abs = sp.sqrt(v**2 - q2)
    g0 = (1 - q2 / (4 * M**2)) ** (half - N)
    gv = g0 / (1 - q2 / mv2) ** 2
    ga = g0 / (1 - q2 / ma2) ** 2
    d = (W + M) ** 2 - q2
    sq2omg = sp.sqrt(2 / omega)
    nomg = N * omega
    mq_w = M * q_abs / W
    return {
        "lamda": sq2omg * mq_w,
        "tv": gv / (3 * W * sq2omg),
        "rv": sp.sqrt(2) * mq_w * (W + M) * gv / d,
        "s": (-q2 / q_abs**2) * (3 * W * M + q2 - M**2) * gv / (6 * M**2),
        "ta": sp.Rational(2, 3) * (zeta / sq2omg) * mq_w * ga / d,
        "ra": (sp.sqrt(2) / 6) * zeta * (ga / W) * (W + M + 2 * nomg * W / d),
        "b": zeta / (3 * W * sq2omg) * (1 + (W**2 - M**2 + q2) / d) * ga,
        "c": (
            zeta
            / (6 * q_abs)
            * (W**2 - M**2 + nomg * (W**2 - M**2 + q2) / d)
            * ga
            / M
        ),
    }


@cache
def _get_fkr_function() -> Callable[..., list[float]]:
    expressions = formulate_fkr_parameters()
    _LOGGER.debug("Lambdifying FKR parameters")
    return sp.lambdify(
        FKR_SYMBOLS, [expressions[name] for name in _FKR_NAMES], "math"
    )


@frozen
class FKRCalculator:
    """Compute `FKRParameters` for the configured model constants.

    The axial and vector masses are stored squared, as that is how they enter the
    dipole form factors.

    >>> calc = FKRCalculator(zeta=0.762, omega=1.05, ma=1.12, mv=0.84)
    >>> round(calc.ma2, 4)
    1.2544
    """

    zeta: float = field(converter=float)
    omega: float = field(converter=float)
    ma: float = field(converter=float)
    mv: float = field(converter=float)
    weinberg_angle: float = field(default=0.0, converter=float)
    ma2: float = field(init=False)
    mv2: float = field(init=False)
    sin2_weinberg: float = field(init=False)

    @ma2.default
    def _ma2(self) -> float:
        return self.ma**2

    @mv2.default
    def _mv2(self) -> float:
        return self.mv**2

    @sin2_weinberg.default
    def _sin2_weinberg(self) -> float:
        return math.sin(self.weinberg_angle) ** 2

    def calculate(
        self, q2: float, W: float, nucleon_mass: float, resonance_index: int  # noqa: N803
    ) -> FKRParameters:
        """Compute a fresh set of FKR parameters for one kinematic point."""
        func = _get_fkr_function()
        values = func(
            q2, W, nucleon_mass, resonance_index,
            self.zeta, self.omega, self.ma2, self.mv2,
        )  # fmt: skip
        return FKRParameters(
            **dict(zip(_FKR_NAMES, map(float, values))),
            sin2_weinberg=self.sin2_weinberg,
        )
