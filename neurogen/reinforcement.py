"""Dopaminergic reward prediction error, temporal-difference critic and actor."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

# Value function
VALUE_FUNCTION_DISCOUNT = 0.95
VALUE_LEARNING_RATE = 0.01
POLICY_LEARNING_RATE = 0.001
ELIGIBILITY_DECAY_LAMBDA = 0.9

# Dopamine system
DOPAMINE_BASELINE = 0.5
DOPAMINE_BURST_AMPLITUDE = 2.0
DOPAMINE_DIP_AMPLITUDE = 0.1
DOPAMINE_TIME_CONSTANT = 100.0
DOPAMINE_DIFFUSION_RATE = 0.1

# Reward prediction error
RPE_INTEGRATION_WINDOW = 500.0
RPE_SURPRISE_THRESHOLD = 0.2
RPE_CONFIDENCE_FACTOR = 0.8

# Actor-critic
ACTOR_EXPLORATION_NOISE = 0.1
CRITIC_REGULARIZATION = 0.001
ADVANTAGE_NORMALIZATION = True

# Intrinsic motivation
CURIOSITY_WEIGHT = 0.1
NOVELTY_DECAY_RATE = 0.01
INFORMATION_GAIN_THRESHOLD = 0.05

NUM_ACTIONS = 32
NUM_STATE_FEATURES = 64
NUM_ENVIRONMENT_FEATURES = 32
_NEURON_SAMPLE = 64
_RPE_HISTORY = 10
_ADVANTAGE_HISTORY = 5


def _zeros(n: int):
    return field(default_factory=lambda: [0.0] * n)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class NeuronActivity:
    """Activity summary of a network neuron as seen by the dopamine system."""

    active: bool = True
    activity_level: float = 0.0
    voltage: float = -65.0
    total_excitatory_input: float = 0.0
    total_inhibitory_input: float = 0.0


@dataclass
class ValueFunction:
    """Multi-timescale value estimates and eligibility traces."""

    short_term_value: float = 0.0
    medium_term_value: float = 0.0
    long_term_value: float = 0.0
    very_long_term_value: float = 0.0
    value_eligibility: float = 0.0
    policy_eligibility: float = 0.0
    feature_eligibility: list[float] = _zeros(16)
    prediction_confidence: float = 0.0
    prediction_uncertainty: float = 0.0
    surprise_accumulator: float = 0.0
    value_error_history: float = 0.0
    learning_progress: float = 0.0
    competence_estimate: float = 0.0


@dataclass
class DopamineNeuron:
    """Dopamine neuron computing reward prediction errors and releasing dopamine."""

    membrane_potential: float = 0.0
    firing_rate: float = 0.0
    baseline_activity: float = 0.0
    burst_threshold: float = 0.0
    predicted_reward: float = 0.0
    actual_reward: float = 0.0
    reward_prediction_error: float = 0.0
    rpe_history: list[float] = _zeros(_RPE_HISTORY)
    value_prediction: float = 0.0
    previous_value: float = 0.0
    td_error: float = 0.0
    td_error_filtered: float = 0.0
    dopamine_concentration: float = 0.0
    dopamine_release_rate: float = 0.0
    dopamine_uptake_rate: float = 0.0
    dopamine_diffusion: float = 0.0
    adaptation_level: float = 0.0
    learning_rate_modulation: float = 0.0
    exploration_drive: float = 0.0
    exploitation_preference: float = 0.0


@dataclass
class ActorCriticState:
    """Policy (actor) and linear value function (critic) state."""

    action_preferences: list[float] = _zeros(NUM_ACTIONS)
    action_probabilities: list[float] = _zeros(NUM_ACTIONS)
    policy_parameters: list[float] = _zeros(NUM_ACTIONS)
    action_eligibility: list[float] = _zeros(NUM_ACTIONS)
    state_value: float = 0.0
    state_features: list[float] = _zeros(NUM_STATE_FEATURES)
    value_weights: list[float] = _zeros(NUM_STATE_FEATURES)
    baseline_estimate: float = 0.0
    advantage_estimate: float = 0.0
    advantage_history: list[float] = _zeros(_ADVANTAGE_HISTORY)
    advantage_variance: float = 0.0
    exploration_bonus: float = 0.0
    uncertainty_estimate: float = 0.0
    information_gain: float = 0.0
    novelty_signal: float = 0.0
    subgoal_preferences: list[float] = _zeros(16)
    temporal_abstraction: float = 0.0
    goal_hierarchy_level: float = 0.0
    learning_to_learn_signal: float = 0.0
    adaptation_speed: float = 0.0
    transfer_potential: float = 0.0


def _shift_in(history: list[float], value: float) -> None:
    """Insert ``value`` at the front of ``history``, dropping the oldest entry."""
    history[1:] = history[:-1]
    history[0] = value


def _extract_features(
    actor_critic: ActorCriticState,
    network_neurons: Sequence[NeuronActivity],
    index: int,
    environmental_features: Sequence[float],
) -> None:
    count = len(network_neurons)
    activity = synchrony = complexity = 0.0
    for i in range(min(_NEURON_SAMPLE, count)):
        neuron = network_neurons[(index * _NEURON_SAMPLE + i) % count]
        if neuron.active:
            activity += neuron.activity_level
            synchrony += math.cos(neuron.voltage * 0.1)
            complexity += abs(neuron.total_excitatory_input - neuron.total_inhibitory_input)

    features = actor_critic.state_features
    features[0] = activity / _NEURON_SAMPLE
    features[1] = synchrony / _NEURON_SAMPLE
    features[2] = complexity / _NEURON_SAMPLE
    features[3 : 3 + NUM_ENVIRONMENT_FEATURES] = environmental_features[:NUM_ENVIRONMENT_FEATURES]


def _update_firing(dopamine: DopamineNeuron, magnitude: float, dt: float) -> None:
    rpe = dopamine.reward_prediction_error
    if rpe > 0:
        dopamine.firing_rate = dopamine.baseline_activity + DOPAMINE_BURST_AMPLITUDE * magnitude
    elif rpe < -0.1:
        dopamine.firing_rate = dopamine.baseline_activity * (
            DOPAMINE_DIP_AMPLITUDE + 0.9 * math.exp(-5.0 * magnitude)
        )
    else:
        dopamine.firing_rate += (dopamine.baseline_activity - dopamine.firing_rate) * 0.1 * dt

    release = dopamine.firing_rate * dopamine.dopamine_release_rate * dt
    uptake = dopamine.dopamine_concentration * dopamine.dopamine_uptake_rate * dt
    dopamine.dopamine_concentration = _clamp(
        dopamine.dopamine_concentration + release - uptake, 0.0, 5.0
    )


def _normalized_advantage(advantage: float, history: Sequence[float]) -> float:
    mean = sum(history) / len(history)
    variance = sum((x - mean) ** 2 for x in history) / len(history)
    if variance > 1e-6:
        return (advantage - mean) / math.sqrt(variance + 1e-6)
    return advantage


def update_dopamine_system(
    dopamine: DopamineNeuron,
    value_function: ValueFunction,
    actor_critic: ActorCriticState,
    network_neurons: Sequence[NeuronActivity],
    index: int,
    reward: float,
    environmental_features: Sequence[float],
    dt: float,
) -> float:
    """Advance one dopamine unit and its critic and actor by ``dt``; return the TD error.

    ``index`` selects which block of network neurons is sampled for the state
    features. ``environmental_features`` must hold at least 32 values.
    """
    if len(environmental_features) < NUM_ENVIRONMENT_FEATURES:
        raise ValueError(
            f"need at least {NUM_ENVIRONMENT_FEATURES} environmental features, "
            f"got {len(environmental_features)}"
        )

    # Critic: linear value of the current state
    _extract_features(actor_critic, network_neurons, index, list(environmental_features))
    state_value = sum(f * w for f, w in zip(actor_critic.state_features, actor_critic.value_weights))
    actor_critic.state_value = state_value

    # Temporal difference error
    td_error = reward + VALUE_FUNCTION_DISCOUNT * state_value - value_function.short_term_value
    dopamine.td_error = td_error
    dopamine.td_error_filtered = dopamine.td_error_filtered * 0.9 + td_error * 0.1

    # Reward prediction error
    dopamine.predicted_reward = state_value
    dopamine.actual_reward = reward
    confidence = _clamp(1.0 - abs(dopamine.td_error_filtered), 0.1, 1.0)
    dopamine.reward_prediction_error = (reward - state_value) * confidence
    _shift_in(dopamine.rpe_history, dopamine.reward_prediction_error)

    magnitude = abs(dopamine.reward_prediction_error)
    _update_firing(dopamine, magnitude, dt)

    # Value function learning
    value_rate = VALUE_LEARNING_RATE * (1.0 + 0.5 * dopamine.dopamine_concentration)
    weights = actor_critic.value_weights
    for i, feature in enumerate(actor_critic.state_features):
        value_function.value_eligibility = (
            value_function.value_eligibility * ELIGIBILITY_DECAY_LAMBDA + feature
        )
        weights[i] += value_rate * td_error * value_function.value_eligibility
        weights[i] *= 1.0 - CRITIC_REGULARIZATION * dt

    value_function.short_term_value += 0.1 * dt * (state_value - value_function.short_term_value)
    value_function.medium_term_value += 0.01 * dt * (state_value - value_function.medium_term_value)
    value_function.long_term_value += 0.001 * dt * (state_value - value_function.long_term_value)

    # Actor: policy gradient with eligibility traces
    advantage = td_error
    if ADVANTAGE_NORMALIZATION:
        advantage = _normalized_advantage(advantage, actor_critic.advantage_history)
    actor_critic.advantage_estimate = advantage
    _shift_in(actor_critic.advantage_history, advantage)

    policy_rate = POLICY_LEARNING_RATE * (1.0 + dopamine.dopamine_concentration)
    for a in range(NUM_ACTIONS):
        eligibility = (
            actor_critic.action_eligibility[a] * ELIGIBILITY_DECAY_LAMBDA
            + actor_critic.action_probabilities[a]
        )
        actor_critic.action_eligibility[a] = eligibility
        actor_critic.policy_parameters[a] += policy_rate * advantage * eligibility

    actor_critic.action_preferences = [math.exp(p) for p in actor_critic.policy_parameters]
    total = sum(actor_critic.action_preferences) + 1e-8
    actor_critic.action_probabilities = [p / total for p in actor_critic.action_preferences]

    # Exploration versus exploitation
    uncertainty = magnitude / (1.0 + magnitude)
    actor_critic.uncertainty_estimate = actor_critic.uncertainty_estimate * 0.99 + uncertainty * 0.01
    actor_critic.exploration_bonus = ACTOR_EXPLORATION_NOISE * math.sqrt(
        actor_critic.uncertainty_estimate
    )
    dopamine.exploration_drive = min(
        1.0, actor_critic.uncertainty_estimate + actor_critic.exploration_bonus
    )
    dopamine.exploitation_preference = 1.0 - dopamine.exploration_drive

    return td_error