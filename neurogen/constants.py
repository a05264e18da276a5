"""Receptor, channel and compartment identifiers plus ion channel parameters."""

from enum import IntEnum


class ReceptorType(IntEnum):
    """Synaptic receptor kinds."""

    AMPA = 0
    NMDA = 1
    GABA_A = 2
    GABA_B = 3


NUM_RECEPTOR_TYPES = len(ReceptorType)


class VoltageGatedChannel(IntEnum):
    """Voltage- and calcium-gated channel kinds."""

    CA = 0
    KCA = 1
    HCN = 2


NUM_VG_CHANNELS = len(VoltageGatedChannel)


class CompartmentType(IntEnum):
    """Neuronal compartment kinds."""

    INACTIVE = 0
    SOMA = 1
    BASAL = 2
    APICAL = 3
    SPINE = 4


# Calcium dynamics
RESTING_CA_CONCENTRATION = 0.0001  # mM (100 nM)
MAX_CA_CONCENTRATION_PHYSIOLOGICAL = 0.01  # mM (10 uM)
CA_BUFFER_CAPACITY = 10.0
CA_BUFFER_KD = 0.001  # mM
CA_EXTRUSION_RATE_SOMA = 0.2  # 1/ms
CA_EXTRUSION_RATE_DENDRITE = 0.1  # 1/ms
CA_DIFFUSION_RATE = 0.05  # 1/ms

CA_VOLUME_FACTOR_SOMA = 1.0
CA_VOLUME_FACTOR_DENDRITE = 2.0
CA_VOLUME_FACTOR_SPINE = 5.0

# AMPA receptor
AMPA_G_MAX_SOMA = 1.0
AMPA_G_MAX_DENDRITE = 0.8
AMPA_TAU_RISE = 0.5
AMPA_TAU_DECAY = 3.0
AMPA_REVERSAL = 0.0

# NMDA receptor
NMDA_G_MAX_SOMA = 0.5
NMDA_G_MAX_DENDRITE = 1.2
NMDA_TAU_RISE = 5.0
NMDA_TAU_DECAY = 50.0
NMDA_REVERSAL = 0.0
NMDA_MG_CONC = 1.0
NMDA_CA_FRACTION = 0.1

# GABA-A receptor
GABA_A_G_MAX_SOMA = 2.0
GABA_A_G_MAX_DENDRITE = 1.5
GABA_A_TAU_RISE = 1.0
GABA_A_TAU_DECAY = 7.0
GABA_A_REVERSAL = -70.0

# GABA-B receptor
GABA_B_G_MAX_SOMA = 1.0
GABA_B_G_MAX_DENDRITE = 0.8
GABA_B_TAU_RISE = 50.0
GABA_B_TAU_DECAY = 100.0
GABA_B_TAU_K = 10.0
GABA_B_REVERSAL = -90.0

# Voltage-gated calcium channel
CA_G_MAX_SOMA = 0.5
CA_G_MAX_DENDRITE = 0.8
CA_G_MAX_SPINE = 0.3
CA_REVERSAL = 50.0
CA_V_HALF = -20.0
CA_K = 9.0
CA_TAU_ACT = 1.0

# Calcium-dependent potassium channel
KCA_G_MAX_SOMA = 2.0
KCA_G_MAX_DENDRITE = 1.5
KCA_REVERSAL = -90.0
KCA_CA_HALF = 0.0005
KCA_HILL_COEF = 2.0
KCA_TAU_ACT = 5.0

# HCN channel
HCN_G_MAX_SOMA = 0.2
HCN_G_MAX_DENDRITE = 0.5
HCN_REVERSAL = -30.0
HCN_V_HALF = -80.0
HCN_K = -8.0
HCN_TAU_MIN = 10.0
HCN_TAU_MAX = 500.0
HCN_V_TAU = -80.0
HCN_K_TAU = -15.0

# Compartment scaling of channel densities
SCALE_FACTOR_SOMA = 1.0
SCALE_FACTOR_BASAL = 0.8
SCALE_FACTOR_APICAL = 1.2
SCALE_FACTOR_SPINE = 0.5

# Numerical bounds
MIN_CONDUCTANCE = 1e-9
MAX_CONDUCTANCE = 100.0
MIN_CA_CONCENTRATION = 1e-6
MAX_CA_CONCENTRATION = 0.1

MIN_TAU = 0.1
MAX_TAU = 1000.0