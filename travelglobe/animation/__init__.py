"""Frame-driven animators for the travel globe.

- camera_animator.py: CameraAnimator (eased, cancellable POV transitions)
- flight_state_machine.py: FlightStateMachine (4 states) + FlightContext
- flight_sequencer.py: FlightSequencer (multi-leg journey playback)
"""

from travelglobe.animation.camera_animator import CameraAnimator
from travelglobe.animation.flight_sequencer import FlightSequencer
from travelglobe.animation.flight_state_machine import (
    FlightContext,
    FlightLogListener,
    FlightStateMachine,
)

__all__ = [
    "CameraAnimator",
    "FlightSequencer",
    "FlightStateMachine",
    "FlightContext",
    "FlightLogListener",
]
