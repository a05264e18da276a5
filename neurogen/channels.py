"""Receptor, voltage-gated channel and calcium dynamics models."""

from __future__ import annotations

import math
from dataclasses import dataclass

from neurogen import constants as c
from neurogen.constants import CompartmentType


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _dual_exponential(
    g: float, state: float, drive: float, dt: float, tau_rise: float, tau_decay: float
) -> tuple[float, float]:
    dg_dt = -g / tau_decay + state
    dstate_dt = -state / tau_rise + drive
    g = max(0.0, g + dg_dt * dt)
    state = max(0.0, state + dstate_dt * dt)
    return g, state


@dataclass(frozen=True)
class AMPAChannel:
    """Fast excitatory receptor with dual-exponential kinetics."""

    g_max: float
    tau_rise: float
    tau_decay: float
    reversal: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> AMPAChannel:
        g_max = c.AMPA_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.AMPA_G_MAX_DENDRITE
        return cls(g_max, c.AMPA_TAU_RISE, c.AMPA_TAU_DECAY, c.AMPA_REVERSAL)

    def compute_current(self, v: float, g: float) -> float:
        return g * (v - self.reversal)

    def update_state(self, g: float, state: float, drive: float, dt: float) -> tuple[float, float]:
        """Advance conductance and rise state by one step; return both."""
        return _dual_exponential(g, state, drive, dt, self.tau_rise, self.tau_decay)


@dataclass(frozen=True)
class NMDAChannel:
    """Excitatory receptor with voltage-dependent magnesium block."""

    g_max: float
    tau_rise: float
    tau_decay: float
    reversal: float
    mg_conc: float
    ca_fraction: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> NMDAChannel:
        g_max = c.NMDA_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.NMDA_G_MAX_DENDRITE
        return cls(
            g_max,
            c.NMDA_TAU_RISE,
            c.NMDA_TAU_DECAY,
            c.NMDA_REVERSAL,
            c.NMDA_MG_CONC,
            c.NMDA_CA_FRACTION,
        )

    def mg_block(self, v: float) -> float:
        """Fraction of the channel left unblocked by magnesium at voltage ``v``."""
        return 1.0 / (1.0 + (self.mg_conc / 3.57) * math.exp(-0.062 * v))

    def compute_current(self, v: float, g: float) -> float:
        return g * self.mg_block(v) * (v - self.reversal)

    def calcium_current(self, v: float, g: float) -> float:
        return self.ca_fraction * self.compute_current(v, g)

    def update_state(self, g: float, state: float, drive: float, dt: float) -> tuple[float, float]:
        """Advance conductance and rise state by one step; return both."""
        return _dual_exponential(g, state, drive, dt, self.tau_rise, self.tau_decay)


@dataclass(frozen=True)
class GABAAChannel:
    """Fast inhibitory chloride receptor."""

    g_max: float
    tau_rise: float
    tau_decay: float
    reversal: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> GABAAChannel:
        g_max = (
            c.GABA_A_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.GABA_A_G_MAX_DENDRITE
        )
        return cls(g_max, c.GABA_A_TAU_RISE, c.GABA_A_TAU_DECAY, c.GABA_A_REVERSAL)

    def compute_current(self, v: float, g: float) -> float:
        return g * (v - self.reversal)

    def update_state(self, g: float, state: float, drive: float, dt: float) -> tuple[float, float]:
        """Advance conductance and rise state by one step; return both."""
        return _dual_exponential(g, state, drive, dt, self.tau_rise, self.tau_decay)


@dataclass(frozen=True)
class GABABChannel:
    """Slow inhibitory receptor coupled through a G-protein cascade."""

    g_max: float
    tau_rise: float
    tau_decay: float
    tau_k: float
    reversal: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> GABABChannel:
        g_max = (
            c.GABA_B_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.GABA_B_G_MAX_DENDRITE
        )
        return cls(g_max, c.GABA_B_TAU_RISE, c.GABA_B_TAU_DECAY, c.GABA_B_TAU_K, c.GABA_B_REVERSAL)

    def compute_current(self, v: float, g: float, g_protein: float) -> float:
        return g * g_protein * (v - self.reversal)

    def update_state(
        self, g: float, state: float, g_protein: float, drive: float, dt: float
    ) -> tuple[float, float, float]:
        """Advance conductance, rise state and G-protein activation; return all three."""
        dg_protein_dt = (g - g_protein) / self.tau_k
        new_g, new_state = _dual_exponential(g, state, drive, dt, self.tau_rise, self.tau_decay)
        new_g_protein = _clamp(g_protein + dg_protein_dt * dt, 0.0, 1.0)
        return new_g, new_state, new_g_protein


@dataclass(frozen=True)
class CaChannel:
    """L-type voltage-gated calcium channel."""

    g_max: float
    reversal: float
    v_half: float
    k: float
    tau_act: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> CaChannel:
        if compartment == CompartmentType.SOMA:
            g_max = c.CA_G_MAX_SOMA
        elif compartment == CompartmentType.SPINE:
            g_max = c.CA_G_MAX_SPINE
        else:
            g_max = c.CA_G_MAX_DENDRITE
        return cls(g_max, c.CA_REVERSAL, c.CA_V_HALF, c.CA_K, c.CA_TAU_ACT)

    def steady_state_activation(self, v: float) -> float:
        return 1.0 / (1.0 + math.exp(-(v - self.v_half) / self.k))

    def compute_current(self, v: float, m: float) -> float:
        return self.g_max * m * (v - self.reversal)

    def update_state(self, m: float, v: float, dt: float) -> float:
        """Return the activation after relaxing toward its steady state for ``dt``."""
        dm_dt = (self.steady_state_activation(v) - m) / self.tau_act
        return _clamp(m + dm_dt * dt, 0.0, 1.0)


@dataclass(frozen=True)
class KCaChannel:
    """Calcium-dependent potassium channel."""

    g_max: float
    reversal: float
    ca_half: float
    hill_coef: float
    tau_act: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> KCaChannel:
        g_max = c.KCA_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.KCA_G_MAX_DENDRITE
        return cls(g_max, c.KCA_REVERSAL, c.KCA_CA_HALF, c.KCA_HILL_COEF, c.KCA_TAU_ACT)

    def calcium_activation(self, ca_conc: float) -> float:
        ca_term = ca_conc**self.hill_coef
        half_term = self.ca_half**self.hill_coef
        return ca_term / (ca_term + half_term)

    def compute_current(self, v: float, m: float) -> float:
        return self.g_max * m * (v - self.reversal)

    def update_state(self, m: float, ca_conc: float, dt: float) -> float:
        """Return the activation after relaxing toward the calcium-set target."""
        dm_dt = (self.calcium_activation(ca_conc) - m) / self.tau_act
        return _clamp(m + dm_dt * dt, 0.0, 1.0)


@dataclass(frozen=True)
class HCNChannel:
    """Hyperpolarisation-activated cation channel."""

    g_max: float
    reversal: float
    v_half: float
    k: float
    tau_min: float
    tau_max: float
    v_tau: float
    k_tau: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> HCNChannel:
        g_max = c.HCN_G_MAX_SOMA if compartment == CompartmentType.SOMA else c.HCN_G_MAX_DENDRITE
        return cls(
            g_max,
            c.HCN_REVERSAL,
            c.HCN_V_HALF,
            c.HCN_K,
            c.HCN_TAU_MIN,
            c.HCN_TAU_MAX,
            c.HCN_V_TAU,
            c.HCN_K_TAU,
        )

    def steady_state_activation(self, v: float) -> float:
        return 1.0 / (1.0 + math.exp((v - self.v_half) / self.k))

    def time_constant(self, v: float) -> float:
        return self.tau_min + (self.tau_max - self.tau_min) / (
            1.0 + math.exp(-(v - self.v_tau) / self.k_tau)
        )

    def compute_current(self, v: float, h: float) -> float:
        return self.g_max * h * (v - self.reversal)

    def update_state(self, h: float, v: float, dt: float) -> float:
        """Return the activation after relaxing toward its steady state for ``dt``."""
        dh_dt = (self.steady_state_activation(v) - h) / self.time_constant(v)
        return _clamp(h + dh_dt * dt, 0.0, 1.0)


@dataclass(frozen=True)
class CalciumDynamics:
    """Calcium buffering, extrusion and influx in one compartment."""

    resting_ca: float
    buffer_capacity: float
    buffer_kd: float
    extrusion_rate: float
    diffusion_rate: float
    volume_factor: float

    @classmethod
    def for_compartment(cls, compartment: CompartmentType) -> CalciumDynamics:
        if compartment == CompartmentType.SOMA:
            extrusion = c.CA_EXTRUSION_RATE_SOMA
            volume = c.CA_VOLUME_FACTOR_SOMA
        else:
            extrusion = c.CA_EXTRUSION_RATE_DENDRITE
            volume = (
                c.CA_VOLUME_FACTOR_SPINE
                if compartment == CompartmentType.SPINE
                else c.CA_VOLUME_FACTOR_DENDRITE
            )
        return cls(
            c.RESTING_CA_CONCENTRATION,
            c.CA_BUFFER_CAPACITY,
            c.CA_BUFFER_KD,
            extrusion,
            c.CA_DIFFUSION_RATE,
            volume,
        )

    def buffering(self, ca_conc: float, buffer_conc: float) -> float:
        return self.buffer_capacity * buffer_conc / (self.buffer_kd + ca_conc)

    def update(
        self, ca_conc: float, buffer_conc: float, i_ca: float, dt: float
    ) -> tuple[float, float]:
        """Return calcium and buffer concentrations after one step of length ``dt``."""
        influx = -i_ca * self.volume_factor
        binding = self.buffering(ca_conc, buffer_conc)
        extrusion = self.extrusion_rate * (ca_conc - self.resting_ca)
        new_ca = max(self.resting_ca, ca_conc + (influx - extrusion - binding) * dt)
        new_buffer = max(0.0, buffer_conc + binding * dt)
        return new_ca, new_buffer