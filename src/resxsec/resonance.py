"""Baryon resonances and their parameters.

The Rein-Sehgal model describes single-pion production through the 18 lowest-lying
baryon resonances of the relativistic harmonic-oscillator quark model. Each
`Resonance` has a mass, a width, an orbital angular momentum :math:`L`, an oscillator
level :math:`N` (the *resonance index*), an isospin, and a spin. These values are
provided by a `BaryonResonanceDataSet`, which is an `.Algorithm` so that the values can
be configured.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from functools import cache
from os.path import dirname, join, realpath

import jsonschema
import yaml
from attrs import field, frozen
from attrs.validators import instance_of, optional

from resxsec.algorithm import Algorithm, ConfigurationError, register_algorithm

_LOGGER = logging.getLogger(__name__)

_PACKAGE_PATH = dirname(realpath(__file__))
RESONANCE_TABLE_FILE = join(_PACKAGE_PATH, "data", "resonances.yml")

with open(join(_PACKAGE_PATH, "schemas", "resonances.json")) as stream:
    _SCHEMA_RESONANCES = json.load(stream)


class Resonance(Enum):
    """Baryon resonances of the Rein-Sehgal model, in the conventional order."""

    P33_1232 = "P33(1232)"
    S11_1535 = "S11(1535)"
    D13_1520 = "D13(1520)"
    S11_1650 = "S11(1650)"
    D13_1700 = "D13(1700)"
    D15_1675 = "D15(1675)"
    S31_1620 = "S31(1620)"
    D33_1700 = "D33(1700)"
    P11_1440 = "P11(1440)"
    P33_1600 = "P33(1600)"
    P13_1720 = "P13(1720)"
    F15_1680 = "F15(1680)"
    P31_1910 = "P31(1910)"
    P33_1920 = "P33(1920)"
    F35_1905 = "F35(1905)"
    F37_1950 = "F37(1950)"
    P11_1710 = "P11(1710)"
    F17_1970 = "F17(1970)"

    @classmethod
    def from_name(cls, name: str) -> Resonance:
        """Get a resonance by its spectroscopic name.

        >>> Resonance.from_name("D13(1520)")
        <Resonance.D13_1520: 'D13(1520)'>
        """
        try:
            return cls(name)
        except ValueError:
            msg = f'Unknown resonance "{name}"'
            raise ValueError(msg) from None

    @property
    def is_delta(self) -> bool:
        """Whether the resonance has isospin 3/2, that is, :math:`2I=3` in its name."""
        return self.value[1] == "3"


@frozen
class ResonanceParameters:
    resonance: Resonance = field(validator=instance_of(Resonance))
    mass: float = field(converter=float)
    width: float = field(converter=float)
    index: int = field(validator=instance_of(int))
    """Oscillator level :math:`N` of the quark model."""
    orbital_angular_momentum: int = field(validator=instance_of(int))
    isospin: float = field(converter=float)
    spin: float = field(converter=float)
    breit_wigner_norm: float | None = field(
        default=None, validator=optional(instance_of(float))
    )
    """Line-shape normalization, `None` if it has to be computed numerically."""


class BaryonResonanceDataSet(Algorithm, ABC):
    """Source of the `ResonanceParameters` of each `Resonance`."""

    @abstractmethod
    def parameters(self, resonance: Resonance) -> ResonanceParameters: ...

    def mass(self, resonance: Resonance) -> float:
        return self.parameters(resonance).mass

    def width(self, resonance: Resonance) -> float:
        return self.parameters(resonance).width

    def breit_wigner_norm(self, resonance: Resonance) -> float | None:
        return self.parameters(resonance).breit_wigner_norm

    def orbital_angular_momentum(self, resonance: Resonance) -> int:
        return self.parameters(resonance).orbital_angular_momentum

    def resonance_index(self, resonance: Resonance) -> int:
        return self.parameters(resonance).index

    def isospin(self, resonance: Resonance) -> float:
        return self.parameters(resonance).isospin

    def spin(self, resonance: Resonance) -> float:
        return self.parameters(resonance).spin


@register_algorithm
class BaryonResonanceDataPDG(BaryonResonanceDataSet):
    """Resonance parameters from :file:`data/resonances.yml`.

    Masses and widths can be overwritten in the parameter set with keys
    :code:`Mass-<name>` and :code:`Width-<name>`, for instance
    :code:`Mass-P33(1232)`.
    """

    name = "resxsec::BaryonResonanceDataPDG"

    def _load_config(self) -> None:
        table: dict[Resonance, ResonanceParameters] = {}
        for resonance, definition in load_resonance_table().items():
            mass = self._get_float_def(f"Mass-{resonance.value}", definition.mass)
            width = self._get_float_def(
                f"Width-{resonance.value}", definition.width
            )
            if mass != definition.mass or width != definition.width:
                _LOGGER.info(
                    f"{resonance.value}: using mass {mass} GeV and width {width} GeV"
                )
            table[resonance] = ResonanceParameters(
                resonance=resonance,
                mass=mass,
                width=width,
                index=definition.index,
                orbital_angular_momentum=definition.orbital_angular_momentum,
                isospin=definition.isospin,
                spin=definition.spin,
                breit_wigner_norm=definition.breit_wigner_norm,
            )
        self.__table = table

    def parameters(self, resonance: Resonance) -> ResonanceParameters:
        try:
            return self.__table[resonance]
        except AttributeError:
            msg = f"{self!r} has not been configured"
            raise ConfigurationError(msg) from None


@frozen
class BaryonResonanceParams:
    """Retrieve the parameters of a resonance from a `BaryonResonanceDataSet`.

    Each call to :meth:`retrieve` returns its own `ResonanceParameters`, so that
    calculations for different resonances never share state.
    """

    data_set: BaryonResonanceDataSet = field(
        validator=instance_of(BaryonResonanceDataSet)
    )

    def retrieve(self, resonance: Resonance) -> ResonanceParameters:
        return self.data_set.parameters(resonance)


@cache
def load_resonance_table(
    filename: str = RESONANCE_TABLE_FILE,
) -> dict[Resonance, ResonanceParameters]:
    """Read and validate a YAML file with resonance definitions."""
    with open(filename) as yaml_file:
        definition = yaml.load(yaml_file, Loader=yaml.SafeLoader)
    jsonschema.validate(instance=definition, schema=_SCHEMA_RESONANCES)
    table = {}
    for name, values in definition["Resonances"].items():
        resonance = Resonance.from_name(name)
        norm = values["BreitWignerNorm"]
        table[resonance] = ResonanceParameters(
            resonance=resonance,
            mass=values["Mass"],
            width=values["Width"],
            index=values["ResonanceIndex"],
            orbital_angular_momentum=values["OrbitalAngularMomentum"],
            isospin=values["IsoSpin"],
            spin=values["Spin"],
            breit_wigner_norm=None if norm == "auto" else float(norm),
        )
    missing = set(Resonance) - set(table)
    if missing:
        names = sorted(r.value for r in missing)
        msg = f"{filename} does not define resonances {', '.join(names)}"
        raise ValueError(msg)
    return table
