"""Message codec and worker boundary for batch stepping."""

from manifold_sim.io.messages import (
    config_from_message,
    config_to_message,
    request_from_message,
    request_to_message,
    response_from_message,
    response_to_message,
)
from manifold_sim.io.worker import PhysicsWorker, Ticket, handle_message

__all__ = [
    "config_from_message",
    "config_to_message",
    "request_from_message",
    "request_to_message",
    "response_from_message",
    "response_to_message",
    "PhysicsWorker",
    "Ticket",
    "handle_message",
]
