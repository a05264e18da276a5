import math

import pytest

from neurogen.curiosity import (
    CuriositySystem,
    run_reinforcement_learning,
    update_curiosity_system,
)
from neurogen.reinforcement import (
    ActorCriticState,
    DopamineNeuron,
    NeuronActivity,
    ValueFunction,
)


def test_zero_state_predicts_zero_and_error_equals_environment():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    env = [float(i) / 32 for i in range(32)]
    update_curiosity_system(curiosity, actor, env, 0.1)
    assert curiosity.world_model_prediction == [0.0] * 32
    assert curiosity.prediction_error == pytest.approx(env)


def test_world_model_prediction_is_uniform_and_bounded():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    actor.state_features = [1.0] * 64
    actor.action_probabilities = [1.0 / 32] * 32
    update_curiosity_system(curiosity, actor, [0.0] * 32, 0.1)
    values = set(curiosity.world_model_prediction)
    assert len(values) == 1
    assert -1.0 < values.pop() < 1.0


def test_surprise_from_unit_environment():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    update_curiosity_system(curiosity, actor, [1.0] * 32, 0.1)
    assert curiosity.surprise_level == pytest.approx(0.1)
    assert curiosity.challenge_level == curiosity.surprise_level


def test_novelty_detector_moves_toward_environment():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    env = [1.0] * 32
    update_curiosity_system(curiosity, actor, env, 0.1)
    assert all(0.0 < d < 1.0 for d in curiosity.novelty_detector)
    assert len(curiosity.novelty_detector) == 16
    assert 0.0 < curiosity.familiarity_level < 1.0


def test_familiar_state_has_full_familiarity():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    reward = update_curiosity_system(curiosity, actor, [0.0] * 32, 0.1)
    assert curiosity.familiarity_level == 1.0
    assert curiosity.information_gain == 0.0
    assert reward == 0.0
    assert curiosity.goal_exploration == 0.0


def test_information_gain_non_negative_and_flow_bounded():
    curiosity = CuriositySystem()
    actor = ActorCriticState()
    actor.action_probabilities = [1.0 / 32] * 32
    for _ in range(5):
        update_curiosity_system(curiosity, actor, [0.5] * 32, 0.1)
        assert curiosity.information_gain >= 0.0
        assert 0.0 < curiosity.flow_state <= 1.0
        assert 0.0 <= curiosity.mastery_level <= 1.0


def test_flow_state_reduces_exploration_bonus():
    curiosity = CuriositySystem(surprise_level=0.5, mastery_level=0.5)
    actor = ActorCriticState(exploration_bonus=1.0)
    update_curiosity_system(curiosity, actor, [0.0] * 32, 0.1)
    assert curiosity.flow_state > 0.7
    assert actor.exploration_bonus == pytest.approx(0.8)


def test_no_flow_keeps_exploration_bonus():
    curiosity = CuriositySystem()
    actor = ActorCriticState(exploration_bonus=1.0)
    update_curiosity_system(curiosity, actor, [0.0] * 32, 0.1)
    assert curiosity.flow_state < 0.7
    assert actor.exploration_bonus == 1.0


def test_short_environment_rejected():
    with pytest.raises(ValueError):
        update_curiosity_system(CuriositySystem(), ActorCriticState(), [0.0] * 10, 0.1)


def _units(n):
    return (
        [DopamineNeuron(baseline_activity=0.5) for _ in range(n)],
        [ValueFunction() for _ in range(n)],
        [ActorCriticState() for _ in range(n)],
        [CuriositySystem() for _ in range(n)],
    )


def test_run_returns_one_result_per_unit():
    dopamine, values, actors, curiosity = _units(3)
    neurons = [NeuronActivity(activity_level=0.2) for _ in range(100)]
    td_errors, rewards = run_reinforcement_learning(
        dopamine, values, actors, curiosity, neurons, 1.0, [0.1] * 32, 0.0, 0.1
    )
    assert len(td_errors) == 3
    assert len(rewards) == 3
    for actor in actors:
        assert math.fsum(actor.action_probabilities) == pytest.approx(1.0, abs=1e-6)
    for system in curiosity:
        assert system.mastery_level > 0.0


def test_run_rejects_mismatched_lengths():
    dopamine, values, actors, curiosity = _units(2)
    with pytest.raises(ValueError):
        run_reinforcement_learning(
            dopamine, values, actors[:1], curiosity, [NeuronActivity()], 0.0, [0.0] * 32, 0.0, 0.1
        )


def test_run_rejects_short_environment():
    dopamine, values, actors, curiosity = _units(1)
    with pytest.raises(ValueError):
        run_reinforcement_learning(
            dopamine, values, actors, curiosity, [NeuronActivity()], 0.0, [0.0] * 5, 0.0, 0.1
        )