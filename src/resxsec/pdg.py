"""Particle codes, masses, and physical constants.

All masses are in GeV and follow the :pdg-review:`2022; Particle Listings` values that
are relevant for single-pion resonance production. Particles are identified by their
PDG Monte Carlo code.
"""

from __future__ import annotations

ELECTRON_NEUTRINO = 12
MUON_NEUTRINO = 14
TAU_NEUTRINO = 16
ELECTRON = 11
MUON = 13
TAU = 15
PROTON = 2212
NEUTRON = 2112
PION_PLUS = 211
PION_ZERO = 111

FERMI_CONSTANT = 1.1663787e-5
"""Fermi coupling constant :math:`G_F` in :math:`\\mathrm{GeV}^{-2}`."""
GEV2_TO_CM2 = 0.389379e-27
"""Conversion from :math:`\\mathrm{GeV}^{-2}` to :math:`\\mathrm{cm}^2`."""

PROTON_MASS = 0.93827208816
NEUTRON_MASS = 0.93956542052
NUCLEON_MASS = 0.5 * (PROTON_MASS + NEUTRON_MASS)
PION_MASS = 0.13957039
"""Charged pion mass, used for the :math:`\\pi N` threshold."""

_MASSES: dict[int, float] = {
    ELECTRON: 0.51099895e-3,
    MUON: 0.1056583755,
    TAU: 1.77686,
    ELECTRON_NEUTRINO: 0.0,
    MUON_NEUTRINO: 0.0,
    TAU_NEUTRINO: 0.0,
    PROTON: PROTON_MASS,
    NEUTRON: NEUTRON_MASS,
    PION_PLUS: PION_MASS,
    PION_ZERO: 0.1349768,
}
_NEUTRINOS = frozenset({ELECTRON_NEUTRINO, MUON_NEUTRINO, TAU_NEUTRINO})


def mass(pdg_code: int) -> float:
    """Mass of a particle or its antiparticle in GeV."""
    try:
        return _MASSES[abs(pdg_code)]
    except KeyError:
        msg = f"No mass available for PDG code {pdg_code}"
        raise KeyError(msg) from None


def is_neutrino(pdg_code: int) -> bool:
    return pdg_code in _NEUTRINOS


def is_antineutrino(pdg_code: int) -> bool:
    return -pdg_code in _NEUTRINOS


def is_proton(pdg_code: int | None) -> bool:
    return pdg_code == PROTON


def is_neutron(pdg_code: int | None) -> bool:
    return pdg_code == NEUTRON


def is_nucleon(pdg_code: int | None) -> bool:
    return is_proton(pdg_code) or is_neutron(pdg_code)


def charged_lepton(neutrino_pdg: int) -> int:
    """Charged lepton that accompanies a (anti)neutrino in a charged-current process.

    >>> charged_lepton(14)
    13
    >>> charged_lepton(-12)
    -11
    """
    if not is_neutrino(neutrino_pdg) and not is_antineutrino(neutrino_pdg):
        msg = f"PDG code {neutrino_pdg} is not a neutrino"
        raise ValueError(msg)
    sign = 1 if neutrino_pdg > 0 else -1
    return sign * (abs(neutrino_pdg) - 1)


def ion_pdg_code(z: int, a: int) -> int:
    """PDG code of a nucleus in the :code:`10LZZZAAAI` convention.

    >>> ion_pdg_code(6, 12)
    1000060120
    """
    return 1_000_000_000 + 10_000 * z + 10 * a
