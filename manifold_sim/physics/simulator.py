"""Step batching and the main simulation controller."""

import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import numpy as np

from manifold_sim.errors import NumericalDegradation
from manifold_sim.physics.acceleration import AccelerationSolver
from manifold_sim.physics.diagnostics import (
    DRIFT_WARNING_THRESHOLD,
    ENERGY_FLOOR,
    EnergyMonitor,
    EnergySample,
)
from manifold_sim.physics.integrators.base import Integrator
from manifold_sim.physics.integrators.rk4 import RK4Integrator
from manifold_sim.physics.state import State
from manifold_sim.utils.config import Config


@dataclass
class StepRequest:
    """A batch of integration steps to run from an initial state.

    Energy is sampled after every step whose global index is a multiple of
    ``log_interval`` (0 disables sampling). A request with ``step_count == 0``
    returns a single sample of the initial state. ``step_offset`` numbers the
    samples globally when a run is split into batches; ``reference_energy``
    defaults to the energy of the initial state.
    """
    initial_state: State
    dt: float
    step_count: int
    log_interval: int = 0
    step_offset: int = 0
    reference_energy: Optional[float] = None
    record_trajectory: bool = False


@dataclass
class StepResponse:
    """Result of a batch: final state, final acceleration and energy log."""
    final_state: State
    final_acceleration: np.ndarray
    energy_log: List[EnergySample]
    reference_energy: float
    steps_completed: int
    halted: bool = False
    faults: Tuple[str, ...] = ()
    trajectory: Optional[List[np.ndarray]] = None

    @property
    def acceleration_direction(self) -> np.ndarray:
        """Unit vector along the final acceleration (zeros if it vanishes)."""
        norm = np.hypot(*self.final_acceleration)
        if norm > 0 and np.isfinite(norm):
            return self.final_acceleration / norm
        return np.zeros(2)


class StepOrchestrator:
    """Runs step batches for one configuration.

    Stateless between calls: everything a batch needs arrives in the
    StepRequest, so independent orchestrators may run in parallel.
    """

    def __init__(
        self,
        config: Config,
        integrator: Optional[Integrator] = None,
        energy_floor: float = ENERGY_FLOOR,
        drift_warning_threshold: float = DRIFT_WARNING_THRESHOLD
    ):
        """Initialize orchestrator.

        Args:
            config: Simulation configuration
            integrator: Integrator to use (default: RK4)
            energy_floor: Denominator for relative error when E0 == 0
            drift_warning_threshold: Relative energy error that triggers a warning
        """
        self.config = config
        self.integrator = integrator or RK4Integrator()
        self.solver = AccelerationSolver(config)
        self.monitor = EnergyMonitor(
            self.solver.metric,
            self.solver.potential,
            energy_floor=energy_floor,
            drift_warning_threshold=drift_warning_threshold,
        )

    def run(self, request: StepRequest) -> StepResponse:
        """Advance the initial state by up to ``request.step_count`` steps.

        The batch halts early, keeping the last finite state, if a step
        produces a non-finite state.
        """
        state = request.initial_state.copy()
        reference = request.reference_energy
        if reference is None:
            reference = self.monitor.energy(state.q, state.v)

        faults = set()

        def accelerate(q, v):
            result = self.solver.solve(q, v)
            faults.update(result.faults)
            return result.acceleration

        energy_log = []
        trajectory = [] if request.record_trajectory else None
        if request.step_count == 0:
            energy_log.append(self.monitor.sample(request.step_offset, state.q, state.v, reference))

        completed = 0
        halted = False
        for i in range(1, request.step_count + 1):
            new_state = self.integrator.step(state, request.dt, accelerate)
            if not new_state.is_finite():
                faults.add("non_finite")
                halted = True
                break
            state = new_state
            completed = i
            if trajectory is not None:
                trajectory.append(state.q.copy())
            if request.log_interval > 0 and (request.step_offset + i) % request.log_interval == 0:
                energy_log.append(
                    self.monitor.sample(request.step_offset + i, state.q, state.v, reference)
                )

        final = self.solver.solve(state.q, state.v)
        faults.update(final.faults)

        drifting = [sample for sample in energy_log if sample.drifting]
        if drifting:
            worst = max(drifting, key=lambda sample: np.nan_to_num(sample.relative_error, nan=np.inf))
            warnings.warn(
                f"Relative energy error {worst.relative_error:.3e} at step {worst.step_index} "
                f"exceeds {self.monitor.drift_warning_threshold:g}; consider a smaller dt",
                NumericalDegradation
            )

        return StepResponse(
            final_state=state,
            final_acceleration=final.acceleration,
            energy_log=energy_log,
            reference_energy=reference,
            steps_completed=completed,
            halted=halted,
            faults=tuple(sorted(faults)),
            trajectory=trajectory,
        )


class Simulator:
    """Main simulation controller.

    Holds the running state across batches and delegates the physics to a
    StepOrchestrator built from the current configuration.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        integrator: Optional[Integrator] = None,
        dt: float = 0.01,
        batch_size: int = 32,
        log_interval: int = 0
    ):
        """Initialize simulator.

        Args:
            config: Simulation configuration (default: Config())
            integrator: Integrator to use (default: RK4)
            dt: Time step
            batch_size: Steps per batch in run()
            log_interval: Energy sampling interval in steps (0 disables)
        """
        self.config = config or Config()
        self.integrator = integrator or RK4Integrator()
        self.dt = dt
        self.batch_size = batch_size
        self.log_interval = log_interval
        self.orchestrator = StepOrchestrator(self.config, self.integrator)

        self.state: Optional[State] = None
        self.reference_energy: Optional[float] = None
        self.acceleration = np.zeros(2)
        self.energy_log: List[EnergySample] = []
        self.faults: Tuple[str, ...] = ()
        self.time = 0.0
        self.step_count = 0
        self.paused = False
        self.halted = False

        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.on_energy_callback: Optional[Callable] = None
        self.verbose = False

    def initialize(self, q, v):
        """Set the initial state and reference energy.

        Args:
            q: Initial generalized coordinates
            v: Initial generalized velocities
        """
        self.state = State(q, v)
        self.reference_energy = self.orchestrator.monitor.energy(self.state.q, self.state.v)
        self.acceleration = self.orchestrator.solver.acceleration(self.state.q, self.state.v)
        self.energy_log = []
        self.faults = ()
        self.time = 0.0
        self.step_count = 0
        self.halted = False

    def reconfigure(self, config: Config):
        """Switch to a new configuration, keeping the current state.

        The kernel is rebuilt (constraint recompiled) and the reference
        energy re-measured, since the potential may have changed.
        """
        self.config = config
        self.orchestrator = StepOrchestrator(config, self.integrator)
        if self.state is not None:
            self.reference_energy = self.orchestrator.monitor.energy(self.state.q, self.state.v)

    def advance(self, n_steps: Optional[int] = None, log_interval: Optional[int] = None) -> Optional[StepResponse]:
        """Run one batch and commit its final state.

        Args:
            n_steps: Steps in the batch (default: batch_size)
            log_interval: Energy sampling interval (default: self.log_interval)

        Returns:
            The batch StepResponse, or None while paused
        """
        if self.state is None:
            raise RuntimeError("Simulator has no state; call initialize() first")
        if self.paused:
            return None

        request = StepRequest(
            initial_state=self.state,
            dt=self.dt,
            step_count=self.batch_size if n_steps is None else n_steps,
            log_interval=self.log_interval if log_interval is None else log_interval,
            step_offset=self.step_count,
            reference_energy=self.reference_energy,
        )
        response = self.orchestrator.run(request)

        self.state = response.final_state
        self.acceleration = response.final_acceleration
        self.time += self.dt * response.steps_completed
        self.step_count += response.steps_completed
        self.energy_log.extend(response.energy_log)
        self.faults = response.faults
        self.halted = response.halted

        if self.verbose:
            for sample in response.energy_log:
                print(f"[Energy] step={sample.step_index} E={sample.energy:.8f} dE/E0={sample.relative_error:.3e}")
            if response.faults:
                print(f"[Faults] step={self.step_count} {', '.join(response.faults)}")

        if self.on_step_callback:
            self.on_step_callback(self, response)
        if self.on_energy_callback and response.energy_log:
            self.on_energy_callback(self, response.energy_log)

        return response

    def step(self) -> Optional[StepResponse]:
        """Perform one simulation step."""
        return self.advance(1)

    def run(self, n_steps: int):
        """Run simulation for specified number of steps in batches.

        Stops early when paused or when a batch halts on a non-finite state.

        Args:
            n_steps: Number of steps to run
        """
        remaining = n_steps
        while remaining > 0:
            response = self.advance(min(self.batch_size, remaining))
            if response is None or response.halted:
                return
            remaining -= response.steps_completed

    def pause(self):
        """Pause simulation."""
        self.paused = True

    def resume(self):
        """Resume simulation."""
        self.paused = False

    def set_timestep(self, dt: float):
        """Set time step.

        Args:
            dt: New time step
        """
        self.dt = dt

    def set_integrator(self, integrator: Integrator):
        """Set integrator.

        Args:
            integrator: New integrator
        """
        self.integrator = integrator
        self.orchestrator = StepOrchestrator(self.config, integrator)

    def get_state(self):
        """Get current simulation state.

        Returns:
            Tuple of (q, v, time, step_count)
        """
        return self.state.q.copy(), self.state.v.copy(), self.time, self.step_count

    def get_energy(self) -> float:
        """Get current total energy."""
        return self.orchestrator.monitor.energy(self.state.q, self.state.v)

    def get_energy_error(self) -> float:
        """Relative energy error of the current state against the reference."""
        return self.orchestrator.monitor.relative_error(self.get_energy(), self.reference_energy)
