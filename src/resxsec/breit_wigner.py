"""Breit-Wigner line shapes that weight the resonance-production cross section.

The cross section of the Rein-Sehgal model is computed for a resonance of zero width
and is then distributed over the invariant mass :math:`W` with a Breit-Wigner line
shape. The line shapes are formulated with `sympy` and lambdified once per class.
A line shape is normalized to unit area over :math:`W` between the :math:`\\pi N`
threshold and :code:`norm-upper-W`, unless the resonance data set provides a fixed
normalization.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from functools import cache
from typing import Callable

import numpy as np
import sympy as sp

from resxsec import pdg
from resxsec.algorithm import Algorithm, ConfigurationError, register_algorithm
from resxsec.resonance import BaryonResonanceDataSet, Resonance, ResonanceParameters

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

_LOGGER = logging.getLogger(__name__)

LINE_SHAPE_SYMBOLS = sp.symbols("W m Gamma0 L", real=True)
"""Arguments of `BreitWigner.formulate`, in order."""
PION_NUCLEON_THRESHOLD = pdg.NUCLEON_MASS + pdg.PION_MASS
_NORM_GRID_SIZE = 4000


def formulate_pion_nucleon_breakup_momentum(W: sp.Expr) -> sp.Expr:  # noqa: N803
    r"""Momentum of the pion and the nucleon in the rest frame of a resonance.

    .. math::
        q(W) = \frac{\sqrt{\left(W^2-M_N^2-m_\pi^2\right)^2-4M_N^2m_\pi^2}}{2W}
    """
    m_n = sp.Float(pdg.NUCLEON_MASS)
    m_pi = sp.Float(pdg.PION_MASS)
    q2 = (W**2 - m_n**2 - m_pi**2) ** 2 - 4 * m_n**2 * m_pi**2
    return sp.sqrt(q2) / (2 * W)


class BreitWigner(Algorithm, ABC):
    """Weight a cross section with a normalized line shape of a resonance."""

    @staticmethod
    @abstractmethod
    def formulate() -> sp.Expr:
        """Unnormalized line shape in terms of `LINE_SHAPE_SYMBOLS`."""

    @override
    def _load_config(self) -> None:
        data_set = self.sub_algorithm(
            "baryonres-dataset-alg-name",
            "baryonres-dataset-param-set",
            BaryonResonanceDataSet,
        )
        upper_w = self._get_float_def("norm-upper-W", 3.0)
        if upper_w <= PION_NUCLEON_THRESHOLD:
            msg = f"norm-upper-W ({upper_w} GeV) has to be above the pion-nucleon threshold"
            raise ConfigurationError(msg)
        norms = {}
        for resonance in Resonance:
            parameters = data_set.parameters(resonance)
            norm = parameters.breit_wigner_norm
            if norm is None:
                norm = self.__integrate(parameters, upper_w)
            norms[resonance] = norm
            _LOGGER.debug(f"{self!r}: norm of {resonance.value} is {norm:.6g}")
        self.__data_set = data_set
        self.__norms = norms

    def evaluate(self, resonance: Resonance, W: float) -> float:  # noqa: N803
        """Value of the normalized line shape in :math:`\\mathrm{GeV}^{-1}`."""
        if not self.is_configured:
            msg = f"{self!r} has not been configured"
            raise ConfigurationError(msg)
        parameters = self.__data_set.parameters(resonance)
        func = _lambdify_line_shape(type(self), "math")
        value = func(
            W,
            parameters.mass,
            parameters.width,
            parameters.orbital_angular_momentum,
        )
        return float(value) / self.__norms[resonance]

    def __integrate(self, parameters: ResonanceParameters, upper_w: float) -> float:
        func = _lambdify_line_shape(type(self), "numpy")
        w_values = np.linspace(PION_NUCLEON_THRESHOLD, upper_w, num=_NORM_GRID_SIZE)
        with np.errstate(invalid="ignore"):  # sqrt at the threshold point
            y_values = func(
                w_values,
                parameters.mass,
                parameters.width,
                parameters.orbital_angular_momentum,
            )
        y_values = np.broadcast_to(y_values, w_values.shape)
        return float(np.sum(0.5 * (y_values[1:] + y_values[:-1]) * np.diff(w_values)))


@register_algorithm
class BreitWignerRes(BreitWigner):
    r"""Non-relativistic Breit-Wigner with constant width.

    .. math::
        BW(W) = \frac{\Gamma_0/2\pi}{(W-m)^2 + \Gamma_0^2/4}
    """

    name = "resxsec::BreitWignerRes"

    @staticmethod
    @override
    def formulate() -> sp.Expr:
        W, m, gamma0, _ = LINE_SHAPE_SYMBOLS
        return (gamma0 / (2 * sp.pi)) / ((W - m) ** 2 + gamma0**2 / 4)


@register_algorithm
class BreitWignerLRes(BreitWigner):
    r"""Breit-Wigner with a width that depends on the orbital angular momentum.

    .. math::
        \Gamma(W) = \Gamma_0 \left(\frac{q(W)}{q(m)}\right)^{2L+1}

    where :math:`q` is given by :func:`formulate_pion_nucleon_breakup_momentum`. The
    line shape vanishes below the :math:`\pi N` threshold.
    """

    name = "resxsec::BreitWignerLRes"

    @staticmethod
    @override
    def formulate() -> sp.Expr:
        W, m, gamma0, L = LINE_SHAPE_SYMBOLS
        q_ratio = formulate_pion_nucleon_breakup_momentum(
            W
        ) / formulate_pion_nucleon_breakup_momentum(m)
        width = gamma0 * q_ratio ** (2 * L + 1)
        line_shape = (width / (2 * sp.pi)) / ((W - m) ** 2 + width**2 / 4)
        return sp.Piecewise(
            (line_shape, W > PION_NUCLEON_THRESHOLD),
            (0, True),
        )


@cache
def _lambdify_line_shape(
    line_shape_class: type[BreitWigner], backend: str
) -> Callable[..., float]:
    _LOGGER.debug(f"Lambdifying {line_shape_class.__name__} to {backend}")
    return sp.lambdify(LINE_SHAPE_SYMBOLS, line_shape_class.formulate(), backend)
