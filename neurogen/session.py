"""Session that owns one CPU network, creating it on first use."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from neurogen.config import NetworkConfig
from neurogen.network_cpu import NetworkCPU


@dataclass(frozen=True)
class SessionStats:
    """Summary statistics reported by a session."""

    avg_firing_rate: float = 0.0
    total_spikes: float = 0.0
    avg_weight: float = 0.0
    reward_signal: float = 0.0
    update_count: int = 0


class NetworkSession:
    """Holds a network built lazily from a configuration.

    The network is created on the first call to :meth:`forward` and dropped by
    :meth:`close`; a later :meth:`forward` builds a fresh one.
    """

    def __init__(self, config: NetworkConfig | None = None, *, seed: int | None = None) -> None:
        self._config = config if config is not None else NetworkConfig()
        self._seed = seed
        self._network: NetworkCPU | None = None

    @property
    def is_open(self) -> bool:
        """Whether a network currently exists in this session."""
        return self._network is not None

    @property
    def network(self) -> NetworkCPU | None:
        """The network owned by the session, if one has been created."""
        return self._network

    def _ensure_network(self) -> NetworkCPU:
        if self._network is None:
            self._network = NetworkCPU(replace(self._config), seed=self._seed)
        return self._network

    def forward(self, inputs: Sequence[float], reward: float = 0.0) -> list[float]:
        """Run the network on ``inputs``, creating it first if needed."""
        return self._ensure_network().forward(list(inputs), reward)

    def update_weights(self, reward: float) -> None:
        """Apply reward-modulated weight changes if a network exists."""
        if self._network is not None:
            self._network.update_weights(reward)

    def close(self) -> None:
        """Release the network, if any."""
        if self._network is not None:
            self._network.cleanup()
            self._network = None

    def stats(self) -> SessionStats:
        """Return the session statistics."""
        return SessionStats()

    def config(self) -> NetworkConfig:
        """Return a copy of the configuration networks are built from."""
        return replace(self._config)

    def __enter__(self) -> NetworkSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()