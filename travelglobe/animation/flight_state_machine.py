"""Flight playback state machine using python-statemachine library.

Playback has 4 states; the segment boundary is a self-transition of
Playing, not a state of its own.

States:
    IDLE: Journey loaded (or empty), plane parked at the first location
    PLAYING: Frames advance progress along the current segment
    PAUSED: Progress frozen, resumes exactly where it stopped
    COMPLETED: Last segment finished, progress parked at 1.0

Transitions:
    play: IDLE -> PLAYING (only with at least one segment), PAUSED -> PLAYING
    pause: PLAYING -> PAUSED
    finish_segment: PLAYING -> PLAYING (next segment) | PLAYING -> COMPLETED (last segment)
    rewind: COMPLETED -> PAUSED (seek after the end makes the journey resumable)
    reset: any state -> IDLE

State-Specific Behavior:
    IDLE: on_enter rewinds the context to segment 0, progress 0
    COMPLETED: on_enter pins progress to 1.0
"""

import logging
from dataclasses import dataclass
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from travelglobe.constants import FlightConfig

logger = logging.getLogger(__name__)


@dataclass
class FlightContext:
    """Shared context/model for the flight state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.

    Attributes:
        current_segment_index: Active segment, clamped to [0, segment_count - 1]
        progress: Progress within the active segment, clamped to [0, 1]
        speed: Playback multiplier, always > 0
        segment_count: Number of segments in the loaded journey
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    current_segment_index: int = 0
    progress: float = 0.0
    speed: float = FlightConfig.DEFAULT_SPEED
    segment_count: int = 0

    def move_to_start(self) -> None:
        self.current_segment_index = 0
        self.progress = 0.0

    def seek(self, index: int) -> int:
        """Jump to the start of a segment, clamping the index. Returns the index used."""
        self.current_segment_index = max(0, min(self.segment_count - 1, index)) if self.segment_count else 0
        self.progress = 0.0
        return self.current_segment_index

    def advance(self, delta: float) -> None:
        """Add progress, capped at 1.0 (overshoot past a segment end is discarded)."""
        self.progress = max(0.0, min(1.0, self.progress + delta))

    @property
    def is_on_last_segment(self) -> bool:
        return self.current_segment_index >= self.segment_count - 1

    def __repr__(self) -> str:
        return (
            f"FlightContext(state={self.state}, segment={self.current_segment_index}/{self.segment_count}, "
            f"progress={self.progress:.3f}, speed={self.speed}x)"
        )


class FlightLogListener:
    """Listener that logs every playback transition.

    Usage:
        sm = FlightStateMachine(context=context)
        sm.add_listener(FlightLogListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[FLIGHT] {source.name} --({event})--> {target.name}")


class FlightStateMachine(StateMachine):
    """State machine for journey playback.

    See module docstring for the transition table.
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    playing = State("Playing")
    paused = State("Paused")
    completed = State("Completed")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    # Start from the beginning (needs a journey) or resume after pause
    play = idle.to(playing, cond="has_segments") | paused.to(playing)
    # Freeze progress
    pause = playing.to(paused)
    # Segment boundary: move on to the next leg, or finish the journey
    finish_segment = playing.to(playing, cond="has_next_segment", on="advance_segment") | playing.to(
        completed, unless="has_next_segment"
    )
    # Seek after completion: park paused so play() continues from the seek target
    rewind = completed.to(paused)
    # Back to the start from anywhere
    reset = idle.to(idle) | playing.to(idle) | paused.to(idle) | completed.to(idle)

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def has_segments(self) -> bool:
        """Guard: a journey with at least one leg is loaded."""
        return self.context.segment_count > 0

    def has_next_segment(self) -> bool:
        """Guard: the current leg is not the last one."""
        return not self.context.is_on_last_segment

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_playing(self) -> bool:
        return self.playing.is_active

    @property
    def is_paused(self) -> bool:
        return self.paused.is_active

    @property
    def is_completed(self) -> bool:
        return self.completed.is_active

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_idle(self) -> None:
        """Hook: Entering idle state."""
        self.context.move_to_start()

    def on_enter_completed(self) -> None:
        """Hook: Entering completed state."""
        self.context.progress = 1.0

    # ==========================================================================
    # Transition Actions
    # ==========================================================================

    def advance_segment(self) -> None:
        """Action on finish_segment when another leg follows."""
        self.context.current_segment_index += 1
        self.context.progress = 0.0

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: FlightContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or FlightContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> FlightContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        return self.current_state.name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(add_log_listener: bool = True) -> tuple["FlightStateMachine", FlightContext]:
        """Factory method to create state machine with context and optional log listener.

        Returns:
            Tuple of (FlightStateMachine, FlightContext)
        """
        context = FlightContext()
        sm = FlightStateMachine(context=context)
        if add_log_listener:
            sm.add_listener(FlightLogListener())
        return sm, context
