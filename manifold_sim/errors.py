"""Fault taxonomy for the manifold simulation kernel.

Nothing here is fatal to a running simulation: exceptions are raised by the
providers that detect a fault and resolved by the component that owns the
fallback policy (usually the acceleration solver). Warnings are the channel
for faults that are reported but never raised to the caller.
"""


class SimulationFault(Exception):
    """Base class for faults detected by the kernel."""

    code = "fault"


class ConfigurationFault(SimulationFault):
    """An unusable configuration value, e.g. an unparseable constraint."""

    code = "configuration"


class DomainFault(SimulationFault):
    """Evaluation at a true mathematical singularity."""

    code = "domain"


class MetricSingularity(DomainFault):
    """The metric is undefined at the requested point (r == rs)."""

    code = "metric_singularity"


class ConstraintEvaluationError(DomainFault):
    """A compiled constraint could not be evaluated at a point."""

    code = "constraint_evaluation"


class SimulationWarning(UserWarning):
    """Base category for kernel warnings."""


class ConfigurationWarning(SimulationWarning):
    """A configuration fault that was resolved by failing closed."""


class NumericalDegradation(SimulationWarning):
    """Energy drift large enough to suggest a step-size mismatch."""
