"""Differential cross section for resonance production in neutrino-nucleon scattering.

The cross section follows D. Rein and L. M. Sehgal, *Neutrino-excitation of baryon
resonances and single pion production*, Ann. Phys. **133** (1981) 79. For each
resonance, the `.HelicityAmplitudes` are computed from the `.FKRParameters` and
combined into left-handed, right-handed, and scalar cross sections:

.. math::
    \\frac{\\mathrm{d}^2\\sigma}{\\mathrm{d}W\\,\\mathrm{d}Q^2} =
    \\frac{G_F^2}{4\\pi^2} \\frac{-q^2}{|\\vec q\\,|^2} \\frac{W}{M} \\kappa
    \\left(U^2 \\sigma_L + V^2 \\sigma_R + 2UV \\sigma_S\\right)

For antineutrinos, :math:`\\sigma_L` and :math:`\\sigma_R` swap places. The result is
weighted with a `.BreitWigner` line shape and multiplied with the number of nucleons
of the struck type in the target.
"""

from __future__ import annotations

import logging
import math
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from attrs import field, frozen
from attrs.validators import instance_of, optional

from resxsec import pdg
from resxsec.algorithm import (
    DEFAULT_PARAM_SET,
    Algorithm,
    ConfigurationError,
    register_algorithm,
)
from resxsec.amplitude import (
    HelicityAmplitudeModel,
    HelicityAmplitudeModelCC,
    HelicityAmplitudeModelNCn,
    HelicityAmplitudeModelNCp,
    select_amplitude_model,
)
from resxsec.breit_wigner import BreitWigner
from resxsec.fkr import FKRCalculator
from resxsec.interaction import InteractionFlag, RefFrame
from resxsec.kinematics import (
    NATIVE_PHASE_SPACE,
    KinePhaseSpace,
    KineVar,
    energy_threshold,
    jacobian,
    kine_range,
)
from resxsec.resonance import BaryonResonanceDataSet, BaryonResonanceParams

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override
if TYPE_CHECKING:
    from resxsec.interaction import Interaction

_LOGGER = logging.getLogger(__name__)


class XSecAlgorithm(Algorithm, ABC):
    """Differential cross section of one physics process."""

    @abstractmethod
    def evaluate(
        self,
        interaction: Interaction,
        phase_space: KinePhaseSpace = NATIVE_PHASE_SPACE,
    ) -> float:
        """Differential cross section in :math:`\\mathrm{GeV}^{-2}` per unit of the
        variables of :code:`phase_space`."""

    @abstractmethod
    def valid_process(self, interaction: Interaction) -> bool: ...

    @abstractmethod
    def valid_kinematics(self, interaction: Interaction) -> bool: ...


@frozen
class _Settings:
    """Everything that `ReinSehgalRESPXSec` resolves when it is configured."""

    fkr_calculator: FKRCalculator = field(validator=instance_of(FKRCalculator))
    resonance_params: BaryonResonanceParams = field(
        validator=instance_of(BaryonResonanceParams)
    )
    breit_wigner: BreitWigner | None = field(validator=optional(instance_of(BreitWigner)))
    amplitude_models: dict[type[HelicityAmplitudeModel], HelicityAmplitudeModel]
    use_dis_res_joining: bool
    wcut: float


@register_algorithm
class ReinSehgalRESPXSec(XSecAlgorithm):
    """Rein-Sehgal cross section for the production of one baryon resonance.

    Configuration keys, with the global key they fall back to:

    - :code:`Zeta` (:code:`RS-Zeta`) and :code:`Omega` (:code:`RS-Omega`)
    - :code:`Ma` (:code:`RES-Ma`) and :code:`Mv` (:code:`RES-Mv`)
    - :code:`weinberg-angle` (:code:`WeinbergAngle`)
    - :code:`weight-with-breit-wigner`, default :code:`true`
    - :code:`use-dis-res-joining-scheme`, default :code:`false`, and :code:`Wcut`
      (:code:`Wcut`)
    - :code:`baryonres-dataset-alg-name` and :code:`baryonres-dataset-param-set`
    - :code:`breit-wigner-alg-name` and :code:`breit-wigner-param-set`, if
      weighting with a Breit-Wigner is enabled
    """

    name = "resxsec::ReinSehgalRESPXSec"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.__settings: _Settings | None = None

    @override
    def _load_config(self) -> None:
        self.__settings = None
        fkr_calculator = FKRCalculator(
            zeta=self._get_float("Zeta", "RS-Zeta"),
            omega=self._get_float("Omega", "RS-Omega"),
            ma=self._get_float("Ma", "RES-Ma"),
            mv=self._get_float("Mv", "RES-Mv"),
            weinberg_angle=self._get_float("weinberg-angle", "WeinbergAngle"),
        )
        weight_with_bw = self._get_bool_def("weight-with-breit-wigner", True)
        data_set = self.sub_algorithm(
            "baryonres-dataset-alg-name",
            "baryonres-dataset-param-set",
            BaryonResonanceDataSet,
        )
        breit_wigner = None
        if weight_with_bw:
            breit_wigner = self.sub_algorithm(
                "breit-wigner-alg-name", "breit-wigner-param-set", BreitWigner
            )
        amplitude_models = {
            model_class: self.factory.get_algorithm(
                model_class.name, DEFAULT_PARAM_SET, HelicityAmplitudeModel
            )
            for model_class in (
                HelicityAmplitudeModelCC,
                HelicityAmplitudeModelNCp,
                HelicityAmplitudeModelNCn,
            )
        }
        use_dis_res_joining = self._get_bool_def("use-dis-res-joining-scheme", False)
        wcut = math.inf
        if use_dis_res_joining:
            wcut = self._get_float("Wcut", "Wcut")
        _LOGGER.info(
            f"{self!r}: {fkr_calculator}, Breit-Wigner: {breit_wigner!r},"
            f" data set: {data_set!r}, W cut: {wcut}"
        )
        self.__settings = _Settings(
            fkr_calculator=fkr_calculator,
            resonance_params=BaryonResonanceParams(data_set),
            breit_wigner=breit_wigner,
            amplitude_models=amplitude_models,
            use_dis_res_joining=use_dis_res_joining,
            wcut=wcut,
        )

    @property
    def _settings(self) -> _Settings:
        if self.__settings is None or not self.is_configured:
            msg = f"{self!r} has not been configured"
            raise ConfigurationError(msg)
        return self.__settings

    @override
    def evaluate(
        self,
        interaction: Interaction,
        phase_space: KinePhaseSpace = NATIVE_PHASE_SPACE,
    ) -> float:
        settings = self._settings
        if not self.valid_process(interaction):
            _LOGGER.debug(f"Not a resonance-production process: {interaction}")
            return 0.0

        W = interaction.kinematics.W  # noqa: N806
        q2 = interaction.kinematics.q2
        if settings.use_dis_res_joining and W >= settings.wcut:
            _LOGGER.debug(
                f"DIS/RES joining scheme: cross section is zero for W={W} >="
                f" Wcut={settings.wcut}"
            )
            return 0.0
        if not self.valid_kinematics(interaction):
            return 0.0

        init_state = interaction.initial_state
        target = init_state.target
        energy = init_state.probe_energy_in(RefFrame.STRUCK_NUCLEON_REST)
        nucleon_mass = target.struck_nucleon_mass
        resonance = interaction.exclusive_tag.resonance
        parameters = settings.resonance_params.retrieve(resonance)
        resonance_mass = parameters.mass

        k = 0.5 * (W**2 - nucleon_mass**2) / nucleon_mass
        v = k - 0.5 * q2 / nucleon_mass
        Q2 = v**2 - q2  # noqa: N806
        Q = math.sqrt(Q2)  # noqa: N806
        gf = pdg.FERMI_CONSTANT**2 / (4 * math.pi**2)
        wf = (-q2 / Q2) * (W / nucleon_mass) * k
        e_prime = energy - v
        u = 0.5 * (energy + e_prime + Q) / energy
        v_mix = 0.5 * (energy + e_prime - Q) / energy

        fkr = settings.fkr_calculator.calculate(q2, W, nucleon_mass, parameters.index)
        _LOGGER.debug(f"FKR parameters for {resonance.value}: {fkr}")

        is_proton = pdg.is_proton(target.struck_nucleon_pdg)
        model_class = select_amplitude_model(
            interaction.process_info.is_weak_cc, is_proton
        )
        amplitudes = settings.amplitude_models[model_class].compute(resonance, fkr)

        xsec_left = amplitudes.plus_3**2 + amplitudes.plus_1**2
        xsec_right = amplitudes.minus_3**2 + amplitudes.minus_1**2
        xsec_scalar = amplitudes.zero_plus**2 + amplitudes.zero_minus**2
        scale_lr = 0.5 * (math.pi / k) * (resonance_mass / nucleon_mass)
        scale_sc = 0.5 * (math.pi / k) * (nucleon_mass / resonance_mass)
        xsec_left *= scale_lr
        xsec_right *= scale_lr
        xsec_scalar *= scale_sc * (-Q2 / q2)
        _LOGGER.debug(f"SL = {xsec_left}, SR = {xsec_right}, SSC = {xsec_scalar}")

        if pdg.is_neutrino(init_state.probe_pdg):
            xsec = gf * wf * (
                u**2 * xsec_left + v_mix**2 * xsec_right + 2 * u * v_mix * xsec_scalar
            )
        else:
            xsec = gf * wf * (
                v_mix**2 * xsec_left + u**2 * xsec_right + 2 * u * v_mix * xsec_scalar
            )

        if phase_space is not NATIVE_PHASE_SPACE:
            xsec *= jacobian(interaction, NATIVE_PHASE_SPACE, phase_space)

        weight = 1.0
        if settings.breit_wigner is not None:
            weight = settings.breit_wigner.evaluate(resonance, W)
            _LOGGER.debug(f"BreitWigner({resonance.value}, W={W}) = {weight}")
        weighted_xsec = weight * xsec
        _LOGGER.debug(
            f"d2xsec/dQ2dW[{interaction}](W={W}, q2={q2}, E={energy}) = {weighted_xsec}"
        )

        if interaction.test_flag(InteractionFlag.ASSUME_FREE_NUCLEON):
            return weighted_xsec
        n_nucleons = target.Z if is_proton else target.N
        return n_nucleons * weighted_xsec

    @override
    def valid_process(self, interaction: Interaction) -> bool:
        if interaction.test_flag(InteractionFlag.SKIP_PROCESS_CHECK):
            return True
        proc_info = interaction.process_info
        if not proc_info.is_resonant or not proc_info.is_weak:
            return False
        init_state = interaction.initial_state
        if not pdg.is_nucleon(init_state.target.struck_nucleon_pdg):
            return False
        probe = init_state.probe_pdg
        if not pdg.is_neutrino(probe) and not pdg.is_antineutrino(probe):
            return False
        return interaction.exclusive_tag.known_resonance

    @override
    def valid_kinematics(self, interaction: Interaction) -> bool:
        if interaction.test_flag(InteractionFlag.SKIP_KINEMATICS_CHECK):
            return True
        energy = interaction.initial_state.probe_energy_in(
            RefFrame.STRUCK_NUCLEON_REST
        )
        threshold = energy_threshold(interaction)
        if energy <= threshold:
            _LOGGER.debug(f"E = {energy} is below threshold {threshold}")
            return False
        kinematics = interaction.kinematics
        w_range = kine_range(interaction, KineVar.W)
        q2_range = kine_range(interaction, KineVar.Q2)
        if not w_range.contains(kinematics.W) or not q2_range.contains(kinematics.Q2):
            _LOGGER.debug(
                f"W = {kinematics.W} or Q2 = {kinematics.Q2} outside of {w_range} and"
                f" {q2_range}"
            )
            return False
        return True
