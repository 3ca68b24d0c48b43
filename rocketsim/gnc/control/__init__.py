"""Control laws for rocket vehicles.

Provides the PID building block, the default TVC attitude controller,
and simple open-loop controllers.
"""

from rocketsim.gnc.control.open_loop import (
    BangBangController,
    FunctionController,
    OpenLoopController,
)
from rocketsim.gnc.control.pid import (
    PIDController,
    PIDGains,
)
from rocketsim.gnc.control.tvc import (
    TVCController,
)

__all__ = [
    "PIDController",
    "PIDGains",
    "TVCController",
    "BangBangController",
    "OpenLoopController",
    "FunctionController",
]
