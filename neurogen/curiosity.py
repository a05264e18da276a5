"""Intrinsic motivation: world-model surprise, novelty, information gain and flow."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from neurogen.reinforcement import (
    ACTOR_EXPLORATION_NOISE,
    CURIOSITY_WEIGHT,
    NUM_ACTIONS,
    NUM_ENVIRONMENT_FEATURES,
    RPE_SURPRISE_THRESHOLD,
    ActorCriticState,
    DopamineNeuron,
    NeuronActivity,
    ValueFunction,
    update_dopamine_system,
)

NUM_PREDICTIONS = 32
NUM_NOVELTY_FEATURES = 16
_FLOW_THRESHOLD = 0.7
_PROGRESS_LEARNING_RATE = 0.001


def _zeros(n: int):
    return field(default_factory=lambda: [0.0] * n)


@dataclass
class CuriositySystem:
    """State of the curiosity-driven exploration system for one unit."""

    world_model_prediction: list[float] = _zeros(NUM_PREDICTIONS)
    prediction_error: list[float] = _zeros(NUM_PREDICTIONS)
    prediction_confidence: float = 0.0
    model_uncertainty: float = 0.0

    novelty_detector: list[float] = _zeros(NUM_NOVELTY_FEATURES)
    familiarity_level: float = 0.0
    surprise_level: float = 0.0
    exploration_value: float = 0.0

    information_gain: float = 0.0
    entropy_estimate: float = 0.0
    mutual_information: float = 0.0
    empowerment: float = 0.0

    competence_progress: float = 0.0
    mastery_level: float = 0.0
    challenge_level: float = 0.0
    flow_state: float = 0.0

    random_exploration: float = 0.0
    directed_exploration: float = 0.0
    social_exploration: float = 0.0
    goal_exploration: float = 0.0


def _check_environment(environmental_features: Sequence[float]) -> None:
    if len(environmental_features) < NUM_ENVIRONMENT_FEATURES:
        raise ValueError(
            f"need at least {NUM_ENVIRONMENT_FEATURES} environmental features, "
            f"got {len(environmental_features)}"
        )


def _entropy_term(p: float) -> float:
    return -p * math.log2(p)


def update_curiosity_system(
    curiosity: CuriositySystem,
    actor_critic: ActorCriticState,
    environmental_features: Sequence[float],
    dt: float,
) -> float:
    """Advance one curiosity system by ``dt`` and return its intrinsic reward.

    In a flow state the actor's exploration bonus is reduced in place.
    """
    _check_environment(environmental_features)
    env = list(environmental_features[:NUM_ENVIRONMENT_FEATURES])

    # World model: a simple linear prediction squashed by tanh
    drive = 0.1 * sum(actor_critic.state_features[:NUM_PREDICTIONS]) + 0.05 * sum(
        actor_critic.action_probabilities[:NUM_ACTIONS]
    )
    prediction = math.tanh(drive)
    curiosity.world_model_prediction = [prediction] * NUM_PREDICTIONS

    # Prediction error and surprise
    curiosity.prediction_error = [
        actual - predicted for actual, predicted in zip(env, curiosity.world_model_prediction)
    ]
    squared = sum(err * err for err in curiosity.prediction_error)
    current_surprise = math.sqrt(squared / NUM_PREDICTIONS)
    curiosity.surprise_level = curiosity.surprise_level * 0.9 + current_surprise * 0.1

    # Novelty relative to a slowly moving average of past states
    novelty = 0.0
    for i, feature in enumerate(env[:NUM_NOVELTY_FEATURES]):
        novelty += abs(feature - curiosity.novelty_detector[i])
        curiosity.novelty_detector[i] = curiosity.novelty_detector[i] * 0.99 + feature * 0.01
    curiosity.familiarity_level = 1.0 / (1.0 + novelty)

    # Information gain from the action distribution
    entropy_before = 0.0
    entropy_after = 0.0
    for probability in actor_critic.action_probabilities[:NUM_ACTIONS]:
        p = probability + 1e-8
        entropy_before += _entropy_term(p)
        p_after = min(1.0, p * (1.0 + curiosity.surprise_level * 0.1))
        entropy_after += _entropy_term(p_after)
    curiosity.information_gain = max(0.0, entropy_after - entropy_before)

    # Competence and mastery
    progress = (
        -_PROGRESS_LEARNING_RATE * curiosity.surprise_level
        if curiosity.surprise_level > 0.0
        else 0.0
    )
    curiosity.competence_progress = curiosity.competence_progress * 0.99 + progress * 0.01
    accuracy = 1.0 / (1.0 + curiosity.surprise_level)
    curiosity.mastery_level = curiosity.mastery_level * 0.999 + accuracy * 0.001

    # Exploration drives
    curiosity.random_exploration = ACTOR_EXPLORATION_NOISE * (1.0 - curiosity.mastery_level)
    curiosity.directed_exploration = curiosity.information_gain * (
        1.0 - curiosity.familiarity_level
    )
    curiosity.goal_exploration = (
        curiosity.surprise_level * 0.5
        if curiosity.surprise_level > RPE_SURPRISE_THRESHOLD
        else 0.0
    )
    curiosity.exploration_value = (
        curiosity.random_exploration
        + curiosity.directed_exploration
        + curiosity.goal_exploration
    )

    intrinsic_reward = CURIOSITY_WEIGHT * (
        curiosity.information_gain + curiosity.competence_progress * 0.5
    )

    # Flow: challenge matched to skill
    curiosity.challenge_level = curiosity.surprise_level
    ratio = curiosity.challenge_level / (curiosity.mastery_level + 1e-6)
    curiosity.flow_state = 1.0 / (1.0 + abs(ratio - 1.0))
    if curiosity.flow_state > _FLOW_THRESHOLD:
        actor_critic.exploration_bonus *= 0.8
        curiosity.directed_exploration *= 1.2

    return intrinsic_reward


def run_reinforcement_learning(
    dopamine_neurons: Sequence[DopamineNeuron],
    value_functions: Sequence[ValueFunction],
    actor_critic_states: Sequence[ActorCriticState],
    curiosity_systems: Sequence[CuriositySystem],
    network_neurons: Sequence[NeuronActivity],
    reward: float,
    environmental_features: Sequence[float],
    current_time: float,
    dt: float,
) -> tuple[list[float], list[float]]:
    """Run the dopamine system for every unit, then the curiosity system.

    Returns the TD errors and the intrinsic rewards, one per unit.
    ``current_time`` is accepted for interface symmetry and does not affect the result.
    """
    count = len(dopamine_neurons)
    for name, items in (
        ("value_functions", value_functions),
        ("actor_critic_states", actor_critic_states),
        ("curiosity_systems", curiosity_systems),
    ):
        if len(items) < count:
            raise ValueError(f"{name} holds {len(items)} entries, need {count}")
    _check_environment(environmental_features)

    td_errors = [
        update_dopamine_system(
            dopamine_neurons[i],
            value_functions[i],
            actor_critic_states[i],
            network_neurons,
            i,
            reward,
            environmental_features,
            dt,
        )
        for i in range(count)
    ]
    intrinsic_rewards = [
        update_curiosity_system(
            curiosity_systems[i], actor_critic_states[i], environmental_features, dt
        )
        for i in range(count)
    ]
    return td_errors, intrinsic_rewards