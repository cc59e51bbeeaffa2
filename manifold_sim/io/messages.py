"""Wire format for the worker boundary.

Messages are plain dicts with camelCase keys, safe to pickle or to encode as
JSON. Requests carry ``initialState``, ``dt``, ``stepCount`` and
``logInterval`` (plus optional ``stepOffset``, ``referenceEnergy`` and
``recordTrajectory``); responses carry ``finalState``,
``finalAcceleration`` and ``energyLog``.
"""

import json
from typing import Any, Dict
import numpy as np

from manifold_sim.physics.diagnostics import EnergySample
from manifold_sim.physics.simulator import StepRequest, StepResponse
from manifold_sim.physics.state import State
from manifold_sim.utils.config import Config


CONFIG_KEYS = {
    "metricKind": "metric_kind",
    "potentialKind": "potential_kind",
    "constraintExpr": "constraint_expr",
    "isRepulsive": "is_repulsive",
    "mass": "mass",
    "couplingMu": "coupling_mu",
    "l1": "l1",
    "l2": "l2",
    "k1": "k1",
    "k2": "k2",
    "gravity": "gravity",
    "schwarzschildRadius": "schwarzschild_radius",
    "dq": "dq",
    "drag": "drag",
    "magneticField": "magnetic_field",
}


def _vector(values) -> list:
    return [float(x) for x in np.asarray(values, dtype=float).reshape(-1)]


def state_to_message(state: State) -> Dict[str, Any]:
    return {"q": _vector(state.q), "v": _vector(state.v)}


def state_from_message(message: Dict[str, Any]) -> State:
    return State(message["q"], message["v"])


def config_to_message(config: Config) -> Dict[str, Any]:
    """Configuration as a camelCase dict."""
    return {key: getattr(config, name) for key, name in CONFIG_KEYS.items()}


def config_from_message(message: Dict[str, Any]) -> Config:
    """Configuration from a camelCase dict; missing keys take defaults.

    Raises:
        ValueError: On unknown keys or invalid values
    """
    unknown = sorted(set(message) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}")
    return Config(**{CONFIG_KEYS[key]: value for key, value in message.items()})


def sample_to_message(sample: EnergySample) -> Dict[str, Any]:
    return {
        "stepIndex": sample.step_index,
        "energy": sample.energy,
        "relativeError": sample.relative_error,
        "drifting": sample.drifting,
    }


def sample_from_message(message: Dict[str, Any]) -> EnergySample:
    return EnergySample(
        step_index=int(message["stepIndex"]),
        energy=float(message["energy"]),
        relative_error=float(message["relativeError"]),
        drifting=bool(message.get("drifting", False)),
    )


def request_to_message(request: StepRequest) -> Dict[str, Any]:
    message = {
        "initialState": state_to_message(request.initial_state),
        "dt": float(request.dt),
        "stepCount": int(request.step_count),
        "logInterval": int(request.log_interval),
        "stepOffset": int(request.step_offset),
        "recordTrajectory": bool(request.record_trajectory),
    }
    if request.reference_energy is not None:
        message["referenceEnergy"] = float(request.reference_energy)
    return message


def request_from_message(message: Dict[str, Any]) -> StepRequest:
    """Decode a step request.

    Raises:
        ValueError: On a negative step count or log interval
    """
    step_count = int(message["stepCount"])
    log_interval = int(message.get("logInterval", 0))
    if step_count < 0 or log_interval < 0:
        raise ValueError("stepCount and logInterval must be non-negative")
    reference = message.get("referenceEnergy")
    return StepRequest(
        initial_state=state_from_message(message["initialState"]),
        dt=float(message["dt"]),
        step_count=step_count,
        log_interval=log_interval,
        step_offset=int(message.get("stepOffset", 0)),
        reference_energy=None if reference is None else float(reference),
        record_trajectory=bool(message.get("recordTrajectory", False)),
    )


def response_to_message(response: StepResponse) -> Dict[str, Any]:
    message = {
        "finalState": state_to_message(response.final_state),
        "finalAcceleration": _vector(response.final_acceleration),
        "energyLog": [sample_to_message(sample) for sample in response.energy_log],
        "referenceEnergy": float(response.reference_energy),
        "stepsCompleted": int(response.steps_completed),
        "halted": bool(response.halted),
        "faults": list(response.faults),
    }
    if response.trajectory is not None:
        message["trajectory"] = [_vector(q) for q in response.trajectory]
    return message


def response_from_message(message: Dict[str, Any]) -> StepResponse:
    trajectory = message.get("trajectory")
    return StepResponse(
        final_state=state_from_message(message["finalState"]),
        final_acceleration=np.asarray(message["finalAcceleration"], dtype=float),
        energy_log=[sample_from_message(entry) for entry in message.get("energyLog", [])],
        reference_energy=float(message.get("referenceEnergy", float("nan"))),
        steps_completed=int(message.get("stepsCompleted", 0)),
        halted=bool(message.get("halted", False)),
        faults=tuple(message.get("faults", ())),
        trajectory=None if trajectory is None else [np.asarray(q, dtype=float) for q in trajectory],
    )


def dumps(message: Dict[str, Any]) -> str:
    """Encode a message as JSON."""
    return json.dumps(message)


def loads(text: str) -> Dict[str, Any]:
    """Decode a JSON message."""
    return json.loads(text)
