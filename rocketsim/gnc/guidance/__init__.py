"""Guidance laws: desired attitude as a function of the vehicle state."""

from rocketsim.gnc.guidance.pitch_program import PitchProgram

__all__ = [
    "PitchProgram",
]
