"""Spiking network simulated on the CPU with Hodgkin-Huxley neurons and STDP."""

from __future__ import annotations

import json
import logging
import math
import random
from dataclasses import asdict, dataclass
from pathlib import Path

from neurogen.config import NetworkConfig

logger = logging.getLogger(__name__)

_V_NA, _V_K, _V_L = 50.0, -77.0, -54.3
_G_NA, _G_K, _G_L = 120.0, 36.0, 0.3
_C_M = 1.0
_RESET_VOLTAGE = -65.0
_REFRACTORY = 2.0
_STDP_INTERVAL = 5


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _rate(scale: float, offset: float, v: float, limit: float) -> float:
    """Rate of the form scale*(v+offset)/(1-exp(-(v+offset)/10)), with its limit at 0."""
    x = v + offset
    denominator = 1.0 - _exp(-x / 10.0)
    if denominator == 0.0:
        return limit
    return scale * x / denominator


@dataclass
class CPUNeuronState:
    """Membrane voltage, gating variables and spike record of one neuron."""

    voltage: float = _RESET_VOLTAGE
    m: float = 0.05
    h: float = 0.60
    n: float = 0.32
    spiked: bool = False
    last_spike_time: float = -1.0


@dataclass
class CPUSynapse:
    """A directed weighted connection between two neurons."""

    pre_neuron_idx: int
    post_neuron_idx: int
    weight: float
    delay: float
    last_pre_spike_time: float = -1.0
    activity_metric: float = 0.0


@dataclass(frozen=True)
class NetworkStats:
    """Snapshot of network activity."""

    active_neurons: int
    total_neurons: int
    average_weight: float
    synapse_count: int
    simulation_time: float


class NetworkCPU:
    """Three-layer spiking network (input, hidden, output) run step by step."""

    def __init__(
        self,
        config: NetworkConfig | None = None,
        *,
        stdp_window: float | None = None,
        reward_modulation_strength: float | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else NetworkConfig()
        self.stdp_window = (
            self.config.spike_correlation_window if stdp_window is None else stdp_window
        )
        self.reward_modulation_strength = (
            self.config.modulation_strength
            if reward_modulation_strength is None
            else reward_modulation_strength
        )
        self.current_time = 0.0
        self.neurons: list[CPUNeuronState] = []
        self.synapses: list[CPUSynapse] = []
        self.input_buffer: list[float] = []
        self.output_buffer: list[float] = []
        self._rng = random.Random(seed)
        self._initialize()

    @property
    def _hidden_range(self) -> range:
        start = self.config.input_size
        return range(start, start + self.config.hidden_size)

    @property
    def _output_range(self) -> range:
        start = self.config.input_size + self.config.hidden_size
        return range(start, start + self.config.output_size)

    def _initialize(self) -> None:
        cfg = self.config
        total = cfg.input_size + cfg.hidden_size + cfg.output_size
        self.neurons = [
            CPUNeuronState(voltage=-65.0 + self._rng.randrange(10) - 5) for _ in range(total)
        ]
        self.input_buffer = [0.0] * cfg.input_size
        self.output_buffer = [0.0] * cfg.output_size
        self._create_topology()
        logger.info("Network initialized with %d neurons, %d synapses", total, len(self.synapses))

    def _create_topology(self) -> None:
        cfg = self.config
        rng = self._rng
        self.synapses = []

        def weight() -> float:
            return rng.uniform(-cfg.weight_init_std, cfg.weight_init_std)

        def delay() -> float:
            return rng.uniform(cfg.delay_min, cfg.delay_max)

        for i in range(cfg.input_size):
            for j in self._hidden_range:
                if rng.random() < cfg.input_hidden_prob:
                    w = weight()
                    self.synapses.append(CPUSynapse(i, j, w, delay()))

        for i in self._hidden_range:
            for j in self._hidden_range:
                if i != j and rng.random() < cfg.hidden_hidden_prob:
                    magnitude = abs(weight())
                    w = magnitude if rng.random() < cfg.exc_ratio else -magnitude
                    self.synapses.append(CPUSynapse(i, j, w, delay()))

        for i in self._hidden_range:
            for j in self._output_range:
                if rng.random() < cfg.hidden_output_prob:
                    w = weight()
                    self.synapses.append(CPUSynapse(i, j, w, delay()))

    def forward(self, inputs: list[float], reward_signal: float = 0.0) -> list[float]:
        """Drive the input layer for one simulation window and return the output rates."""
        cfg = self.config
        inputs = list(inputs)
        if len(inputs) != cfg.input_size:
            raise ValueError(
                f"Input size mismatch: expected {cfg.input_size}, got {len(inputs)}"
            )
        self.input_buffer = inputs

        steps = int(cfg.simulation_time / cfg.dt)
        for step in range(steps):
            self.current_time = step * cfg.dt
            for neuron, value in zip(self.neurons, self.input_buffer):
                neuron.voltage += value * cfg.input_current_scale * cfg.dt
            for neuron in self.neurons:
                self._update_neuron(neuron, cfg.dt, 0.0)
            self._propagate_spikes()
            if step % _STDP_INTERVAL == 0:
                self._apply_stdp()

        return self._extract_output()

    def _update_neuron(self, neuron: CPUNeuronState, dt: float, external_current: float) -> None:
        v, m, h, n = neuron.voltage, neuron.m, neuron.h, neuron.n

        am = _rate(0.1, 40.0, v, 1.0)
        bm = 4.0 * _exp(-(v + 65.0) / 18.0)
        ah = 0.07 * _exp(-(v + 65.0) / 20.0)
        bh = 1.0 / (1.0 + _exp(-(v + 35.0) / 10.0))
        an = _rate(0.01, 55.0, v, 0.1)
        bn = 0.125 * _exp(-(v + 65.0) / 80.0)

        neuron.m += dt * (am * (1.0 - m) - bm * m)
        neuron.h += dt * (ah * (1.0 - h) - bh * h)
        neuron.n += dt * (an * (1.0 - n) - bn * n)

        i_na = _G_NA * m**3 * h * (v - _V_NA)
        i_k = _G_K * n**4 * (v - _V_K)
        i_l = _G_L * (v - _V_L)
        neuron.voltage += dt * (-i_na - i_k - i_l + external_current) / _C_M

        neuron.spiked = False
        if (
            neuron.voltage > self.config.spike_threshold
            and neuron.last_spike_time < self.current_time - _REFRACTORY
        ):
            neuron.spiked = True
            neuron.last_spike_time = self.current_time
            neuron.voltage = _RESET_VOLTAGE

    def _propagate_spikes(self) -> None:
        for syn in self.synapses:
            pre = self.neurons[syn.pre_neuron_idx]
            if pre.spiked and self.current_time - pre.last_spike_time >= syn.delay:
                self.neurons[syn.post_neuron_idx].voltage += syn.weight
                syn.activity_metric += 1.0
                syn.last_pre_spike_time = pre.last_spike_time

    def _clamp_weight(self, weight: float) -> float:
        limit = self.config.max_weight
        return max(-limit, min(limit, weight))

    def _apply_stdp(self) -> None:
        cfg = self.config
        for syn in self.synapses:
            post = self.neurons[syn.post_neuron_idx]
            if syn.last_pre_spike_time > 0 and post.last_spike_time > 0:
                delta_t = post.last_spike_time - syn.last_pre_spike_time
                if abs(delta_t) < self.stdp_window:
                    if delta_t > 0:
                        change = cfg.stdp_learning_rate * _exp(-delta_t / cfg.stdp_tau_pre)
                    else:
                        change = -cfg.stdp_learning_rate * _exp(delta_t / cfg.stdp_tau_post)
                    syn.weight = self._clamp_weight(syn.weight + change)

    def _extract_output(self) -> list[float]:
        for k, idx in enumerate(self._output_range):
            if self.neurons[idx].spiked:
                self.output_buffer[k] = 1.0
            else:
                self.output_buffer[k] *= 0.95
        return list(self.output_buffer)

    def update_weights(self, reward_signal: float) -> None:
        """Scale recently active synapses by the reward and decay their activity."""
        factor = 1.0 + reward_signal * self.reward_modulation_strength
        for syn in self.synapses:
            if syn.activity_metric > 0:
                syn.weight = self._clamp_weight(syn.weight * factor)
                syn.activity_metric *= 0.9

    def cleanup(self) -> None:
        """Release all neurons, synapses and buffers."""
        self.neurons.clear()
        self.synapses.clear()
        self.input_buffer.clear()
        self.output_buffer.clear()

    def reset(self) -> None:
        """Return neurons and synapses to their resting state, keeping weights."""
        self.current_time = 0.0
        for neuron in self.neurons:
            neuron.voltage = _RESET_VOLTAGE
            neuron.spiked = False
            neuron.last_spike_time = -1.0
        for syn in self.synapses:
            syn.last_pre_spike_time = -1.0
            syn.activity_metric = 0.0

    def stats(self) -> NetworkStats:
        """Return counts of spiking neurons, synapses and the mean absolute weight."""
        active = sum(1 for neuron in self.neurons if neuron.spiked)
        average = (
            sum(abs(syn.weight) for syn in self.synapses) / len(self.synapses)
            if self.synapses
            else 0.0
        )
        return NetworkStats(
            active_neurons=active,
            total_neurons=len(self.neurons),
            average_weight=average,
            synapse_count=len(self.synapses),
            simulation_time=self.current_time,
        )

    def print_stats(self) -> None:
        """Write the current statistics to standard output."""
        s = self.stats()
        print("Network Stats:")
        print(f"  Active neurons: {s.active_neurons}/{s.total_neurons}")
        print(f"  Average weight: {s.average_weight:g}")
        print(f"  Synapses: {s.synapse_count}")
        print(f"  Simulation time: {s.simulation_time:g}ms")

    def save_state(self, filename: str | Path) -> None:
        """Write neurons, synapses, buffers and clock to a JSON file."""
        state = {
            "current_time": self.current_time,
            "neurons": [asdict(neuron) for neuron in self.neurons],
            "synapses": [asdict(syn) for syn in self.synapses],
            "input_buffer": self.input_buffer,
            "output_buffer": self.output_buffer,
        }
        Path(filename).write_text(json.dumps(state), encoding="utf-8")
        logger.info("State saved to %s", filename)

    def load_state(self, filename: str | Path) -> None:
        """Replace the network state with one written by :meth:`save_state`."""
        state = json.loads(Path(filename).read_text(encoding="utf-8"))
        self.current_time = float(state["current_time"])
        self.neurons = [CPUNeuronState(**item) for item in state["neurons"]]
        self.synapses = [CPUSynapse(**item) for item in state["synapses"]]
        self.input_buffer = [float(x) for x in state["input_buffer"]]
        self.output_buffer = [float(x) for x in state["output_buffer"]]
        logger.info("State loaded from %s", filename)