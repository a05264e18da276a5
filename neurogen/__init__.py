"""Spiking neural network simulation: ion channel models, a CPU network with STDP, and dopamine-driven reinforcement learning."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "constants",
    "channels",
    "network_cpu",
    "session",
    "reinforcement",
    "curiosity",
]