# neurogen

A small toolkit for simulating spiking neural networks in plain Python,
with no dependencies beyond the standard library.

It provides:

- `neurogen.config`: `NetworkConfig` and `AcceleratedNetworkConfig`. These
  hold the parameters of a network. `validate()` checks that the parameters
  are consistent. `finalize()` computes derived values such as
  `total_synapses` and `hidden_size` and repairs inverted ranges.
  `summary()` gives a multi-line overview and `describe()` a one-line one.
- `neurogen.constants`: the enumerations `ReceptorType`,
  `VoltageGatedChannel` and `CompartmentType`, and the physiological
  constants used by the channel models.
- `neurogen.channels`: receptor and channel models (`AMPAChannel`,
  `NMDAChannel`, `GABAAChannel`, `GABABChannel`, `CaChannel`, `KCaChannel`,
  `HCNChannel`) and `CalciumDynamics`. Each is built for a compartment type
  with `for_compartment()`. Their `update_state()` / `update()` methods
  return the new state values rather than changing anything in place.
- `neurogen.network_cpu`: `NetworkCPU`, a three-layer (input, hidden,
  output) Hodgkin–Huxley network. It covers spike propagation, periodic
  STDP, reward-modulated weight updates through `update_weights()`,
  `reset()`, `stats()` / `print_stats()`, and JSON snapshots through
  `save_state()` / `load_state()`.
- `neurogen.session`: `NetworkSession`, which creates a `NetworkCPU` on the
  first `forward()` call. It is released by `close()` or by leaving a
  `with` block.
- `neurogen.reinforcement`: a dopamine reward-prediction-error unit with a
  temporal-difference critic and a softmax actor (`update_dopamine_system`).
- `neurogen.curiosity`: an intrinsic-motivation system
  (`update_curiosity_system`). `run_reinforcement_learning` steps every
  dopamine unit and then every curiosity system. It returns the TD errors
  and the intrinsic rewards.

## Installation

```
pip install .
```

## Example

```python
from neurogen.config import NetworkConfig
from neurogen.network_cpu import NetworkCPU

config = NetworkConfig(input_size=4, hidden_size=16, output_size=2)
network = NetworkCPU(config, seed=1)

outputs = network.forward([1.0, 0.5, 0.0, 0.2], reward_signal=0.0)
network.update_weights(reward_signal=1.0)
print(outputs)
network.print_stats()
network.save_state("network.json")
```

`forward()` raises `ValueError` if the number of inputs differs from
`config.input_size`.

A session keeps one network alive between calls and creates it on first use:

```python
from neurogen.session import NetworkSession

with NetworkSession(seed=1) as session:
    outputs = session.forward([0.0] * session.config().input_size, reward=0.0)
    session.update_weights(reward=0.5)
```

Channel models are built for a compartment type:

```python
from neurogen.channels import NMDAChannel
from neurogen.constants import CompartmentType

nmda = NMDAChannel.for_compartment(CompartmentType.SOMA)
print(nmda.mg_block(-70.0), nmda.mg_block(0.0))
```

The reinforcement-learning units work on plain dataclasses:

```python
from neurogen.curiosity import CuriositySystem, run_reinforcement_learning
from neurogen.reinforcement import (
    ActorCriticState,
    DopamineNeuron,
    NeuronActivity,
    ValueFunction,
)

neurons = [NeuronActivity(activity_level=0.5) for _ in range(64)]
td_errors, intrinsic = run_reinforcement_learning(
    [DopamineNeuron(baseline_activity=0.5)],
    [ValueFunction()],
    [ActorCriticState()],
    [CuriositySystem()],
    neurons,
    reward=1.0,
    environmental_features=[0.1] * 32,
    current_time=0.0,
    dt=1.0,
)
```

## What it does not do

- Everything runs on the CPU in pure Python. The device fields of
  `AcceleratedNetworkConfig` (`enable_cuda`, `threads_per_block` and so on)
  are recorded and shown by `describe()`, but nothing acts on them.
- `NetworkSession.stats()` always returns a `SessionStats` with every field
  at zero. Use `NetworkCPU.stats()` for real activity figures.
- The channel models and the reinforcement-learning units are separate
  building blocks. `NetworkCPU` does not use them.
- There is no command-line program. The package is used as a library.

## Running the tests

```
pip install .[test]
pytest
```