import pytest

from neurogen.config import NetworkConfig
from neurogen.network_cpu import CPUNeuronState, CPUSynapse, NetworkCPU


def small_config(**overrides):
    params = dict(
        input_size=2,
        hidden_size=3,
        output_size=2,
        simulation_time=0.5,
        dt=0.1,
        input_hidden_prob=1.0,
        hidden_hidden_prob=1.0,
        hidden_output_prob=1.0,
    )
    params.update(overrides)
    return NetworkConfig(**params)


def test_full_connectivity_synapse_count():
    net = NetworkCPU(small_config(), seed=1)
    assert len(net.synapses) == 2 * 3 + 3 * 2 + 3 * 2
    assert len(net.neurons) == 7


def test_zero_probability_gives_no_synapses():
    cfg = small_config(input_hidden_prob=0.0, hidden_hidden_prob=0.0, hidden_output_prob=0.0)
    net = NetworkCPU(cfg, seed=1)
    assert net.synapses == []


def test_topology_respects_layers():
    net = NetworkCPU(small_config(), seed=3)
    for syn in net.synapses:
        assert syn.pre_neuron_idx != syn.post_neuron_idx
        if syn.pre_neuron_idx < 2:
            assert 2 <= syn.post_neuron_idx < 5
        else:
            assert 2 <= syn.pre_neuron_idx < 5
            assert syn.post_neuron_idx >= 2


def test_weights_and_delays_within_ranges():
    cfg = small_config()
    net = NetworkCPU(cfg, seed=5)
    for syn in net.synapses:
        assert -cfg.weight_init_std <= syn.weight <= cfg.weight_init_std
        assert cfg.delay_min <= syn.delay <= cfg.delay_max


@pytest.mark.parametrize("ratio, sign_ok", [(1.0, lambda w: w >= 0), (0.0, lambda w: w <= 0)])
def test_excitatory_ratio_controls_recurrent_sign(ratio, sign_ok):
    net = NetworkCPU(small_config(exc_ratio=ratio), seed=9)
    recurrent = [
        s for s in net.synapses if 2 <= s.pre_neuron_idx < 5 and 2 <= s.post_neuron_idx < 5
    ]
    assert len(recurrent) == 6
    assert all(sign_ok(s.weight) for s in recurrent)


def test_initial_voltages_near_rest():
    net = NetworkCPU(small_config(), seed=11)
    for neuron in net.neurons:
        assert -70.0 <= neuron.voltage <= -61.0
        assert neuron.voltage == int(neuron.voltage)
        assert neuron.last_spike_time == -1.0


def test_forward_rejects_wrong_input_size():
    net = NetworkCPU(small_config(), seed=2)
    with pytest.raises(ValueError):
        net.forward([1.0, 2.0, 3.0])


def test_forward_output_shape_and_range():
    net = NetworkCPU(small_config(), seed=2)
    out = net.forward([1.0, 0.5], 0.0)
    assert len(out) == 2
    assert all(0.0 <= x <= 1.0 for x in out)
    assert net.current_time == pytest.approx(0.4)


def test_same_seed_is_deterministic():
    a = NetworkCPU(small_config(), seed=42)
    b = NetworkCPU(small_config(), seed=42)
    assert a.synapses == b.synapses
    assert a.forward([1.0, 1.0]) == b.forward([1.0, 1.0])
    assert a.neurons == b.neurons


def test_reset_restores_rest_state():
    net = NetworkCPU(small_config(), seed=4)
    net.forward([2.0, 2.0])
    net.synapses[0].activity_metric = 3.0
    net.reset()
    assert net.current_time == 0.0
    assert all(n.voltage == -65.0 and not n.spiked for n in net.neurons)
    assert all(s.activity_metric == 0.0 and s.last_pre_spike_time == -1.0 for s in net.synapses)


def test_update_weights_scales_active_synapses():
    net = NetworkCPU(small_config(), reward_modulation_strength=1.0, seed=6)
    active, idle = net.synapses[0], net.synapses[1]
    active.weight, active.activity_metric = 1.0, 1.0
    idle.weight, idle.activity_metric = 0.3, 0.0
    net.update_weights(0.5)
    assert active.weight == pytest.approx(1.5)
    assert active.activity_metric == pytest.approx(0.9)
    assert idle.weight == 0.3


def test_update_weights_clamps_to_max_weight():
    cfg = small_config()
    net = NetworkCPU(cfg, reward_modulation_strength=1.0, seed=6)
    syn = net.synapses[0]
    syn.weight, syn.activity_metric = 1.8, 1.0
    net.update_weights(1.0)
    assert syn.weight == cfg.max_weight


def test_stats_reports_counts_and_mean_weight():
    net = NetworkCPU(small_config(), seed=8)
    stats = net.stats()
    assert stats.synapse_count == len(net.synapses)
    assert stats.total_neurons == 7
    expected = sum(abs(s.weight) for s in net.synapses) / len(net.synapses)
    assert stats.average_weight == pytest.approx(expected)


def test_print_stats_writes_synapse_count(capsys):
    net = NetworkCPU(small_config(), seed=8)
    net.print_stats()
    captured = capsys.readouterr().out
    assert f"Synapses: {len(net.synapses)}" in captured
    assert "Active neurons: 0/7" in captured


def test_cleanup_empties_network():
    net = NetworkCPU(small_config(), seed=8)
    net.cleanup()
    assert net.neurons == [] and net.synapses == []
    assert net.stats().average_weight == 0.0


def test_save_and_load_round_trip(tmp_path):
    source = NetworkCPU(small_config(), seed=13)
    source.forward([1.0, 0.2])
    path = tmp_path / "state.json"
    source.save_state(path)

    target = NetworkCPU(small_config(), seed=99)
    target.load_state(path)
    assert target.synapses == source.synapses
    assert target.neurons == source.neurons
    assert target.output_buffer == source.output_buffer
    assert target.current_time == source.current_time


def test_state_dataclass_defaults():
    neuron = CPUNeuronState()
    syn = CPUSynapse(0, 1, 0.2, 1.0)
    assert (neuron.m, neuron.h, neuron.n) == (0.05, 0.60, 0.32)
    assert syn.activity_metric == 0.0 and syn.last_pre_spike_time == -1.0