"""Compute resonance-production cross sections with the Rein-Sehgal model.

The central algorithm is `.ReinSehgalRESPXSec`, which evaluates the differential
cross section :math:`\\mathrm{d}^2\\sigma/\\mathrm{d}W\\,\\mathrm{d}Q^2` of an
`.Interaction` in which a neutrino excites a baryon resonance. The algorithm and its
collaborators (`.BaryonResonanceDataSet`, `.BreitWigner`, and
`.HelicityAmplitudeModel`) are configured from a `.ConfigPool` and created by an
`.AlgorithmFactory`.
"""

from __future__ import annotations

from resxsec.algorithm import AlgorithmFactory, ConfigurationError, default_factory
from resxsec.xsec import ReinSehgalRESPXSec


def get_xsec_algorithm(
    param_set: str = "Default", factory: AlgorithmFactory | None = None
) -> ReinSehgalRESPXSec:
    """Get a configured `.ReinSehgalRESPXSec` from an `.AlgorithmFactory`.

    If no :code:`factory` is given, the algorithm is created from the configuration
    that comes with the package. For instance, use :code:`param_set="NoBreitWigner"`
    to get the cross section without Breit-Wigner weighting.
    """
    if factory is None:
        factory = default_factory()
    return factory.get_algorithm(ReinSehgalRESPXSec.name, param_set, ReinSehgalRESPXSec)


__all__ = [
    "AlgorithmFactory",
    "ConfigurationError",
    "ReinSehgalRESPXSec",
    "get_xsec_algorithm",
]
