"""GNC (Guidance, Navigation, Control) module for rocket vehicles.

Every control law implements ``Controller``; the simulation runner depends
on nothing else.

Example:
    >>> from rocketsim.gnc import TVCController
    >>> from rocketsim.gnc.guidance import PitchProgram
    >>>
    >>> controller = TVCController(guidance=PitchProgram(target_pitch=np.radians(60)))
"""

from rocketsim.gnc.control import (
    BangBangController,
    FunctionController,
    OpenLoopController,
    PIDController,
    PIDGains,
    TVCController,
)
from rocketsim.gnc.controller import Controller
from rocketsim.gnc.guidance import PitchProgram

__all__ = [
    # Interface
    "Controller",
    # Control
    "PIDController",
    "PIDGains",
    "TVCController",
    "BangBangController",
    "OpenLoopController",
    "FunctionController",
    # Guidance
    "PitchProgram",
]
