"""Stage separation state machine.

One state per stage index. After every integration step the active stage is
checked for propellant exhaustion; an exhausted stage with a successor is
jettisoned (its dry mass removed) and the index advances. The transition is
one-way, and the last stage is never jettisoned.
"""

import logging

from beartype import beartype

from rocketsim.dynamics.state import RigidBodyState
from rocketsim.vehicle.mission import BURNOUT_THRESHOLD, Mission

logger = logging.getLogger(__name__)


@beartype
def remaining_propellant(state: RigidBodyState, mission: Mission) -> float:
    """Propellant left in the active stage [kg]."""
    return mission.remaining_propellant(state.mass, state.active_stage_index)


@beartype
def check_staging(state: RigidBodyState, mission: Mission) -> RigidBodyState:
    """Apply stage separation if the active stage is exhausted.

    Args:
        state: State after an integration step
        mission: Mission being flown

    Returns:
        The same state, or a copy with the spent stage's dry mass removed
        and the stage index incremented.
    """
    index = state.active_stage_index
    stage = mission.active_stage(index)
    if stage is None or index + 1 >= mission.num_stages:
        return state

    if remaining_propellant(state, mission) > BURNOUT_THRESHOLD:
        return state

    staged = state.copy()
    staged.mass = state.mass - stage.dry_mass
    staged.active_stage_index = index + 1

    logger.info(
        "Staging at t=%.3f s: jettisoned '%s' (%.2f kg), alt=%.1f m",
        state.time, stage.name, stage.dry_mass, state.altitude,
    )
    return staged
