"""Network configuration parameters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NetworkConfig:
    """Parameters of the simulated network."""

    # Simulation
    dt: float = 0.01
    axonal_speed: float = 1.0

    # Spatial organisation
    network_width: float = 1000.0
    network_height: float = 1000.0
    network_depth: float = 100.0

    # Connectivity
    max_connection_distance: float = 200.0
    connection_probability_base: float = 0.01
    distance_decay_constant: float = 50.0
    spike_correlation_window: float = 20.0
    correlation_threshold: float = 0.3

    # Neurogenesis
    enable_neurogenesis: bool = True
    neurogenesis_rate: float = 0.001
    activity_threshold_low: float = 0.1
    activity_threshold_high: float = 10.0
    max_neurons: int = 1000

    # Pruning
    enable_pruning: bool = True
    synapse_pruning_threshold: float = 0.05
    neuron_pruning_threshold: float = 0.01
    pruning_check_interval: float = 100.0
    synapse_activity_window: float = 1000.0

    # Plasticity
    enable_stdp: bool = True
    stdp_learning_rate: float = 0.01
    stdp_tau_pre: float = 20.0
    stdp_tau_post: float = 20.0
    eligibility_decay: float = 50.0
    min_synaptic_weight: float = 0.001
    max_synaptic_weight: float = 2.0

    reward_learning_rate: float = 0.01
    a_plus: float = 0.01
    a_minus: float = 0.012
    tau_plus: float = 20.0
    tau_minus: float = 20.0
    min_weight: float = 0.001
    max_weight: float = 2.0

    homeostatic_strength: float = 0.001

    # Topology
    input_size: int = 64
    output_size: int = 10
    hidden_size: int = 256

    input_hidden_prob: float = 0.8
    hidden_hidden_prob: float = 0.1
    hidden_output_prob: float = 0.9

    weight_init_std: float = 0.5
    delay_min: float = 1.0
    delay_max: float = 5.0

    input_current_scale: float = 10.0

    exc_ratio: float = 0.8
    simulation_time: float = 50.0

    # Column topology
    num_columns: int = 4
    neurons_per_column: int = 256
    local_fan_out: int = 30
    local_fan_in: int = 30

    w_exc_min: float = 0.05
    w_exc_max: float = 0.15
    w_inh_min: float = 0.20
    w_inh_max: float = 0.40

    d_min: float = 0.5
    d_max: float = 2.0

    total_synapses: int = 0

    enable_monitoring: bool = True
    monitoring_interval: int = 100

    enable_neuromodulation: bool = True
    modulation_strength: float = 0.1

    spike_threshold: float = 30.0

    def validate(self) -> bool:
        """Return whether the parameters are mutually consistent."""
        return (
            self.input_size > 0
            and self.output_size > 0
            and self.hidden_size > 0
            and self.min_weight >= 0.0
            and self.max_weight > self.min_weight
            and self.tau_plus > 0.0
            and self.tau_minus > 0.0
            and self.a_plus >= 0.0
            and self.a_minus >= 0.0
            and self.num_columns > 0
            and self.neurons_per_column > 0
            and self.local_fan_out > 0
            and self.w_exc_min >= 0.0
            and self.w_exc_max > self.w_exc_min
            and self.w_inh_min >= 0.0
            and self.w_inh_max > self.w_inh_min
            and self.d_min > 0.0
            and self.d_max > self.d_min
        )

    def finalize(self) -> None:
        """Compute derived values and repair inconsistent ranges in place."""
        self.total_synapses = self.num_columns * self.neurons_per_column * self.local_fan_out
        if self.w_exc_max <= self.w_exc_min:
            self.w_exc_max = self.w_exc_min + 0.1
        if self.w_inh_max <= self.w_inh_min:
            self.w_inh_max = self.w_inh_min + 0.1
        if self.d_max <= self.d_min:
            self.d_max = self.d_min + 0.5
        self.hidden_size = self.num_columns * self.neurons_per_column
        if self.dt <= 0.0:
            self.dt = 0.01

    def summary(self) -> str:
        """Return a human-readable multi-line overview of the main settings."""
        lines = [
            "=== Network Configuration ===",
            f"Input Size: {self.input_size}",
            f"Hidden Size: {self.hidden_size}",
            f"Output Size: {self.output_size}",
            f"Simulation Time: {self.simulation_time:g} ms",
            f"Time Step: {self.dt:g} ms",
            f"Excitatory Ratio: {self.exc_ratio:g}",
            "============================",
        ]
        return "\n".join(lines)

    def describe(self) -> str:
        """Return a compact one-line description."""
        return (
            f"NetworkConfig{{dt={self.dt:f}"
            f", max_neurons={self.hidden_size}"
            f", numColumns={self.num_columns}"
            f", neuronsPerColumn={self.neurons_per_column}}}"
        )


@dataclass
class AcceleratedNetworkConfig(NetworkConfig):
    """Network configuration with GPU execution options."""

    enable_cuda: bool = False
    force_gpu_sync: bool = False
    cuda_device_id: int = 0
    gpu_memory_limit: int = 0

    threads_per_block: int = 256
    use_pinned_memory: bool = True
    async_memory_transfer: bool = True

    gpu_load_threshold: float = 100.0
    adaptive_processing: bool = True

    def describe(self) -> str:
        """Return a compact one-line description including device options."""
        enabled = "true" if self.enable_cuda else "false"
        return f"{super().describe()}, cuda_enabled={enabled}, device_id={self.cuda_device_id}"