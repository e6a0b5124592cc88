"""Helicity amplitudes for the weak excitation of baryon resonances.

Rein and Sehgal express the amplitudes :math:`f_{\\pm 1}, f_{\\pm 3}, f_{0\\pm}` for
the transition from a nucleon to each resonance in terms of the `.FKRParameters`. The
subscript denotes twice the helicity of the resonance along the momentum transfer:
:math:`f_{\\pm 3}` vanish for spin-1/2 resonances.

There are three models: one for charged-current interactions and one for
neutral-current interactions on protons and neutrons each. Use
:func:`select_amplitude_model` to decide which one applies.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from math import sqrt
from typing import TYPE_CHECKING, Callable

from attrs import frozen

from resxsec.algorithm import Algorithm, register_algorithm
from resxsec.resonance import Resonance

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override
if TYPE_CHECKING:
    from resxsec.fkr import FKRParameters

_LOGGER = logging.getLogger(__name__)


@frozen
class HelicityAmplitudes:
    minus_1: float = 0.0
    plus_1: float = 0.0
    minus_3: float = 0.0
    plus_3: float = 0.0
    zero_minus: float = 0.0
    zero_plus: float = 0.0

    def __mul__(self, factor: float) -> HelicityAmplitudes:
        return HelicityAmplitudes(
            minus_1=factor * self.minus_1,
            plus_1=factor * self.plus_1,
            minus_3=factor * self.minus_3,
            plus_3=factor * self.plus_3,
            zero_minus=factor * self.zero_minus,
            zero_plus=factor * self.zero_plus,
        )

    __rmul__ = __mul__


class HelicityAmplitudeModel(Algorithm, ABC):
    """Compute the `HelicityAmplitudes` of a resonance from `.FKRParameters`."""

    @abstractmethod
    def compute(
        self, resonance: Resonance, fkr: FKRParameters
    ) -> HelicityAmplitudes: ...


@register_algorithm
class HelicityAmplitudeModelCC(HelicityAmplitudeModel):
    name = "resxsec::HelicityAmplitudeModelCC"

    @override
    def compute(self, resonance: Resonance, fkr: FKRParameters) -> HelicityAmplitudes:
        amplitudes = _compute_rein_sehgal(resonance, fkr)
        _LOGGER.debug(f"CC amplitudes for {resonance.value}: {amplitudes}")
        return amplitudes


@register_algorithm
class HelicityAmplitudeModelNCp(HelicityAmplitudeModel):
    """Neutral-current amplitudes on a proton.

    The vector current of the :math:`Z^0` is the isovector part of the
    electromagnetic current, multiplied by :math:`1-2\\sin^2\\theta_W`. The isoscalar
    part of the current is neglected.
    """

    name = "resxsec::HelicityAmplitudeModelNCp"

    @override
    def compute(self, resonance: Resonance, fkr: FKRParameters) -> HelicityAmplitudes:
        nc_fkr = fkr.scale_vector(1 - 2 * fkr.sin2_weinberg)
        amplitudes = _compute_rein_sehgal(resonance, nc_fkr)
        _LOGGER.debug(f"NC proton amplitudes for {resonance.value}: {amplitudes}")
        return amplitudes


@register_algorithm
class HelicityAmplitudeModelNCn(HelicityAmplitudeModel):
    """Neutral-current amplitudes on a neutron.

    Same as `HelicityAmplitudeModelNCp`, but the isovector current changes sign for
    the transition from a neutron to an isospin-1/2 resonance.
    """

    name = "resxsec::HelicityAmplitudeModelNCn"

    @override
    def compute(self, resonance: Resonance, fkr: FKRParameters) -> HelicityAmplitudes:
        nc_fkr = fkr.scale_vector(1 - 2 * fkr.sin2_weinberg)
        amplitudes = _compute_rein_sehgal(resonance, nc_fkr)
        if not resonance.is_delta:
            amplitudes = -1 * amplitudes
        _LOGGER.debug(f"NC neutron amplitudes for {resonance.value}: {amplitudes}")
        return amplitudes


def select_amplitude_model(
    is_cc: bool, is_proton: bool
) -> type[HelicityAmplitudeModel]:
    """Decide which amplitude model applies to an interaction.

    >>> select_amplitude_model(is_cc=True, is_proton=False).__name__
    'HelicityAmplitudeModelCC'
    >>> select_amplitude_model(is_cc=False, is_proton=False).__name__
    'HelicityAmplitudeModelNCn'
    """
    if is_cc:
        return HelicityAmplitudeModelCC
    if is_proton:
        return HelicityAmplitudeModelNCp
    return HelicityAmplitudeModelNCn


def _compute_rein_sehgal(
    resonance: Resonance, fkr: FKRParameters
) -> HelicityAmplitudes:
    compute = _AMPLITUDE_TABLE.get(resonance)
    if compute is None:
        msg = f"No helicity amplitudes for resonance {resonance.value}"
        raise NotImplementedError(msg)
    return compute(fkr)


def _p33_1232(fkr: FKRParameters) -> HelicityAmplitudes:
    return HelicityAmplitudes(
        minus_1=sqrt(2) * fkr.r_minus,
        plus_1=-sqrt(2) * fkr.r_plus,
        minus_3=sqrt(6) * fkr.r_minus,
        plus_3=-sqrt(6) * fkr.r_plus,
        zero_minus=2 * sqrt(2) * fkr.c,
        zero_plus=2 * sqrt(2) * fkr.c,
    )


def _s11_1535(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 4 / sqrt(6)
    d = 2 * sqrt(3)
    a = sqrt(6) * fkr.lamda * fkr.s
    b = 2 * sqrt(2 / 3) * (fkr.lamda * fkr.c - 3 * fkr.b)
    return HelicityAmplitudes(
        minus_1=d * fkr.t_minus + c * fkr.lamda * fkr.r_minus,
        plus_1=-d * fkr.t_plus - c * fkr.lamda * fkr.r_plus,
        zero_minus=-a + b,
        zero_plus=a + b,
    )


def _d13_1520(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 4 / sqrt(3)
    d = 6 / sqrt(2)
    a = 2 * sqrt(2 / 3) * fkr.lamda * fkr.s
    b = 4 / sqrt(3) * fkr.lamda * fkr.c
    return HelicityAmplitudes(
        minus_1=sqrt(6) * fkr.t_minus - c * fkr.lamda * fkr.r_minus,
        plus_1=sqrt(6) * fkr.t_plus - c * fkr.lamda * fkr.r_plus,
        minus_3=d * fkr.t_minus,
        plus_3=d * fkr.t_plus,
        zero_minus=-a + b,
        zero_plus=a + b,
    )


def _s11_1650(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 1 / sqrt(6)
    b = sqrt(2 / 3) * (fkr.lamda * fkr.c - 3 * fkr.b)
    return HelicityAmplitudes(
        minus_1=c * fkr.lamda * fkr.r_minus,
        plus_1=-c * fkr.lamda * fkr.r_plus,
        zero_minus=-b,
        zero_plus=-b,
    )


def _d13_1700(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 1 / sqrt(30)
    d = 3 / sqrt(10)
    b = sqrt(2 / 15) * fkr.lamda * fkr.c
    return HelicityAmplitudes(
        minus_1=c * fkr.lamda * fkr.r_minus,
        plus_1=c * fkr.lamda * fkr.r_plus,
        minus_3=d * fkr.lamda * fkr.r_minus,
        plus_3=d * fkr.lamda * fkr.r_plus,
        zero_minus=-b,
        zero_plus=b,
    )


def _d15_1675(fkr: FKRParameters) -> HelicityAmplitudes:
    c = sqrt(3 / 10)
    d = sqrt(3 / 5)
    return HelicityAmplitudes(
        minus_1=c * fkr.lamda * fkr.r_minus,
        plus_1=-c * fkr.lamda * fkr.r_plus,
        minus_3=d * fkr.lamda * fkr.r_minus,
        plus_3=-d * fkr.lamda * fkr.r_plus,
    )


def _s31_1620(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 1 / sqrt(6)
    a = sqrt(3 / 2) * fkr.lamda * fkr.s
    b = sqrt(1 / 6) * (fkr.lamda * fkr.c + 3 * fkr.b)
    return HelicityAmplitudes(
        minus_1=sqrt(3) * fkr.t_minus - c * fkr.lamda * fkr.r_minus,
        plus_1=-sqrt(3) * fkr.t_plus + c * fkr.lamda * fkr.r_plus,
        zero_minus=a - b,
        zero_plus=-a - b,
    )


def _d33_1700(fkr: FKRParameters) -> HelicityAmplitudes:
    c = 1 / sqrt(3)
    d = 3 / sqrt(2)
    a = sqrt(1 / 3) * fkr.lamda * fkr.s
    b = 2 / sqrt(3) * fkr.lamda * fkr.c
    return HelicityAmplitudes(
        minus_1=sqrt(3) * fkr.t_minus + c * fkr.lamda * fkr.r_minus,
        plus_1=sqrt(3) * fkr.t_plus + c * fkr.lamda * fkr.r_plus,
        minus_3=d * fkr.t_minus,
        plus_3=d * fkr.t_plus,
        zero_minus=-a + b,
        zero_plus=a + b,
    )


def _p11_1440(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    c = 5 * sqrt(3) / 6
    a = sqrt(3 / 4) * lamda2 * fkr.s
    b = c * (lamda2 * fkr.c - 2 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=-sqrt(3 / 4) * lamda2 * fkr.r_minus,
        plus_1=-sqrt(3 / 4) * lamda2 * fkr.r_plus,
        zero_minus=-a + b,
        zero_plus=a + b,
    )


def _p33_1600(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(2 / 3) * (lamda2 * fkr.c - 2 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=1 / sqrt(6) * lamda2 * fkr.r_minus,
        plus_1=-1 / sqrt(6) * lamda2 * fkr.r_plus,
        minus_3=1 / sqrt(2) * lamda2 * fkr.r_minus,
        plus_3=-1 / sqrt(2) * lamda2 * fkr.r_plus,
        zero_minus=b,
        zero_plus=b,
    )


def _p13_1720(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    c = sqrt(3 / 5)
    a = sqrt(3 / 5) * lamda2 * fkr.s
    b = sqrt(3 / 5) * (lamda2 * fkr.c - 5 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=-sqrt(27 / 10) * fkr.lamda * fkr.t_minus
        - c * lamda2 * fkr.r_minus / 2,
        plus_1=sqrt(27 / 10) * fkr.lamda * fkr.t_plus + c * lamda2 * fkr.r_plus / 2,
        minus_3=sqrt(9 / 10) * fkr.lamda * fkr.t_minus,
        plus_3=-sqrt(9 / 10) * fkr.lamda * fkr.t_plus,
        zero_minus=a - b,
        zero_plus=a + b,
    )


def _f15_1680(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    c = sqrt(9 / 5)
    d = sqrt(18 / 5)
    a = sqrt(9 / 10) * lamda2 * fkr.s
    b = sqrt(9 / 10) * lamda2 * fkr.c
    return HelicityAmplitudes(
        minus_1=-c * fkr.lamda * fkr.t_minus + lamda2 * fkr.r_minus / sqrt(5),
        plus_1=-c * fkr.lamda * fkr.t_plus + lamda2 * fkr.r_plus / sqrt(5),
        minus_3=-d * fkr.lamda * fkr.t_minus,
        plus_3=-d * fkr.lamda * fkr.t_plus,
        zero_minus=-a + b,
        zero_plus=a + b,
    )


def _p31_1910(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(4 / 15) * (lamda2 * fkr.c - 5 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=-sqrt(1 / 15) * lamda2 * fkr.r_minus,
        plus_1=-sqrt(1 / 15) * lamda2 * fkr.r_plus,
        zero_minus=-b,
        zero_plus=b,
    )


def _p33_1920(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(2 / 15) * (lamda2 * fkr.c - 5 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=sqrt(1 / 15) * lamda2 * fkr.r_minus,
        plus_1=-sqrt(1 / 15) * lamda2 * fkr.r_plus,
        minus_3=-sqrt(1 / 5) * lamda2 * fkr.r_minus,
        plus_3=sqrt(1 / 5) * lamda2 * fkr.r_plus,
        zero_minus=-b,
        zero_plus=-b,
    )


def _f35_1905(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(2 / 35) * lamda2 * fkr.c
    return HelicityAmplitudes(
        minus_1=sqrt(18 / 35) * lamda2 * fkr.r_minus,
        plus_1=sqrt(18 / 35) * lamda2 * fkr.r_plus,
        minus_3=sqrt(1 / 35) * lamda2 * fkr.r_minus,
        plus_3=sqrt(1 / 35) * lamda2 * fkr.r_plus,
        zero_minus=-b,
        zero_plus=b,
    )


def _f37_1950(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(8 / 35) * lamda2 * fkr.c
    return HelicityAmplitudes(
        minus_1=-sqrt(6 / 35) * lamda2 * fkr.r_minus,
        plus_1=sqrt(6 / 35) * lamda2 * fkr.r_plus,
        minus_3=-sqrt(2 / 7) * lamda2 * fkr.r_minus,
        plus_3=sqrt(2 / 7) * lamda2 * fkr.r_plus,
        zero_minus=b,
        zero_plus=b,
    )


def _p11_1710(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    a = sqrt(3 / 8) * lamda2 * fkr.s
    b = sqrt(1 / 6) * (lamda2 * fkr.c - 2 * fkr.lamda * fkr.b)
    return HelicityAmplitudes(
        minus_1=sqrt(3 / 8) * lamda2 * fkr.r_minus,
        plus_1=sqrt(3 / 8) * lamda2 * fkr.r_plus,
        zero_minus=a - b,
        zero_plus=-a - b,
    )


def _f17_1970(fkr: FKRParameters) -> HelicityAmplitudes:
    lamda2 = fkr.lamda**2
    b = sqrt(2 / 7) * lamda2 * fkr.c
    return HelicityAmplitudes(
        minus_1=-sqrt(3 / 35) * lamda2 * fkr.r_minus,
        plus_1=sqrt(3 / 35) * lamda2 * fkr.r_plus,
        minus_3=-sqrt(1 / 7) * lamda2 * fkr.r_minus,
        plus_3=sqrt(1 / 7) * lamda2 * fkr.r_plus,
        zero_minus=b,
        zero_plus=b,
    )


_AMPLITUDE_TABLE: dict[Resonance, Callable[[FKRParameters], HelicityAmplitudes]] = {
    Resonance.P33_1232: _p33_1232,
    Resonance.S11_1535: _s11_1535,
    Resonance.D13_1520: _d13_1520,
    Resonance.S11_1650: _s11_1650,
    Resonance.D13_1700: _d13_1700,
    Resonance.D15_1675: _d15_1675,
    Resonance.S31_1620: _s31_1620,
    Resonance.D33_1700: _d33_1700,
    Resonance.P11_1440: _p11_1440,
    Resonance.P33_1600: _p33_1600,
    Resonance.P13_1720: _p13_1720,
    Resonance.F15_1680: _f15_1680,
    Resonance.P31_1910: _p31_1910,
    Resonance.P33_1920: _p33_1920,
    Resonance.F35_1905: _f35_1905,
    Resonance.F37_1950: _f37_1950,
    Resonance.P11_1710: _p11_1710,
    Resonance.F17_1970: _f17_1970,
}
