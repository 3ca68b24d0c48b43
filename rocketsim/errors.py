"""Exception types raised by rocketsim."""


class RocketSimError(Exception):
    """Base class for all rocketsim errors."""


class ConfigurationError(RocketSimError, ValueError):
    """Invalid stage, mission, or simulation configuration.

    Raised at construction time so that degenerate vehicles (zero dry mass,
    propellant without thrust, zero timestep, ...) never reach the
    integrator.
    """


class ExportError(RocketSimError):
    """Writing a trajectory or summary to disk failed."""
