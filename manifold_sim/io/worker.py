"""Run step batches off the caller's thread by message passing.

The caller never shares memory with the worker: each batch is a request dict
in and a response dict out. Cancellation is cooperative; changing options or
calling ``invalidate()`` bumps a generation counter, and any response issued
under an older generation is discarded instead of being applied.
"""

from concurrent.futures import Executor, Future, ProcessPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional

from manifold_sim.io.messages import (
    config_from_message,
    config_to_message,
    request_from_message,
    request_to_message,
    response_from_message,
    response_to_message,
)
from manifold_sim.physics.integrators import get_integrator
from manifold_sim.physics.simulator import StepOrchestrator, StepRequest, StepResponse
from manifold_sim.utils.config import Config


def handle_message(message: Dict[str, Any]) -> Dict[str, Any]:
    """Run one batch described by a message.

    The message holds the step request fields, a ``configuration`` dict and
    optionally an ``integrator`` name (default "rk4").
    """
    config = config_from_message(message.get("configuration", {}))
    request = request_from_message(message)
    orchestrator = StepOrchestrator(config, get_integrator(message.get("integrator", "rk4")))
    return response_to_message(orchestrator.run(request))


@dataclass(frozen=True)
class Ticket:
    """Handle for a submitted batch."""
    generation: int
    future: Future


class PhysicsWorker:
    """Submits batches to an executor and filters out stale responses."""

    def __init__(
        self,
        config: Config,
        executor: Optional[Executor] = None,
        integrator: str = "rk4",
        max_workers: int = 1
    ):
        """Initialize worker.

        Args:
            config: Initial simulation configuration
            executor: Executor to submit to (default: a process pool owned by the worker)
            integrator: Integrator name used by the worker
            max_workers: Pool size when the worker creates its own pool
        """
        self._owns_executor = executor is None
        self._executor = executor or ProcessPoolExecutor(max_workers=max_workers)
        self._integrator = integrator
        self._configuration = config_to_message(config)
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def set_options(self, config: Config):
        """Switch configuration; batches already in flight become stale."""
        self._configuration = config_to_message(config)
        self._generation += 1

    def invalidate(self):
        """Mark every in-flight batch as stale."""
        self._generation += 1

    def advance(self, request: StepRequest) -> Ticket:
        """Submit a batch under the current configuration."""
        message = request_to_message(request)
        message["configuration"] = dict(self._configuration)
        message["integrator"] = self._integrator
        future = self._executor.submit(handle_message, message)
        return Ticket(self._generation, future)

    def is_stale(self, ticket: Ticket) -> bool:
        return ticket.generation != self._generation

    def result(self, ticket: Ticket, timeout: Optional[float] = None) -> Optional[StepResponse]:
        """Wait for a batch; None if it was issued under an older generation.

        Exceptions raised in the worker propagate from here.
        """
        payload = ticket.future.result(timeout)
        if self.is_stale(ticket):
            return None
        return response_from_message(payload)

    def close(self):
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
