"""CameraAnimator - smooth, cancellable camera transitions.

One animation at a time: animate_to() while a transition is running cancels
it and starts the new one from the camera's current, possibly
mid-transition, point of view. The camera therefore never jumps when
re-targeted.

Per frame:
    t   = clamp(elapsed / duration, 0, 1)
    t'  = easing(t)
    pov = interpolate_pov(start, target, t')   # lng crosses the seam the short way

The POV is written and broadcast to listeners every frame; the frame handle
is released once t reaches 1.
"""

import logging
from collections.abc import Callable
from math import isfinite

from travelglobe.constants import CameraConfig
from travelglobe.core.coordinate_projector import CoordinateProjector
from travelglobe.core.easing import EasingFunction, resolve_easing
from travelglobe.core.frame_scheduler import FrameDrivenAnimator, FrameScheduler
from travelglobe.model.camera_pov import CameraPOV

logger = logging.getLogger(__name__)

POVListener = Callable[[CameraPOV], None]


class CameraAnimator(FrameDrivenAnimator):
    """Animates the globe camera between points of view.

    Args:
        scheduler: Host frame scheduler
        initial_pov: Starting point of view (home view if omitted)

    Example:
        camera = CameraAnimator(scheduler)
        camera.add_listener(renderer.set_pov)
        camera.animate_to(CameraPOV(lat=48.85, lng=2.35, altitude=1.5), duration_ms=1200, easing="easeInOutCubic")
    """

    def __init__(self, scheduler: FrameScheduler, initial_pov: CameraPOV | None = None) -> None:
        super().__init__(scheduler, name="camera")
        self._pov = (initial_pov or CameraPOV.home()).normalized()
        self._start = self._pov
        self._target: CameraPOV | None = None
        self._duration_ms = 0.0
        self._elapsed_ms = 0.0
        self._easing_name = CameraConfig.DEFAULT_EASING
        self._easing: EasingFunction = resolve_easing(CameraConfig.DEFAULT_EASING)[1]
        self._listeners: list[POVListener] = []

    # ==========================================================================
    # Read access
    # ==========================================================================

    @property
    def pov(self) -> CameraPOV:
        """Current point of view."""
        return self._pov

    @property
    def target(self) -> CameraPOV | None:
        """Target of the running transition, None when idle."""
        return self._target

    @property
    def is_animating(self) -> bool:
        return self._target is not None

    @property
    def easing_name(self) -> str:
        return self._easing_name

    def add_listener(self, listener: POVListener) -> None:
        """Register a callable receiving every POV written."""
        self._listeners.append(listener)

    def remove_listener(self, listener: POVListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==========================================================================
    # Transitions
    # ==========================================================================

    def animate_to(
        self,
        target: CameraPOV,
        duration_ms: float = CameraConfig.DEFAULT_DURATION_MS,
        easing: str = CameraConfig.DEFAULT_EASING,
    ) -> None:
        """Start a transition from the current POV to target.

        Cancels any running transition first. Degenerate input is clamped:
        non-finite target components are normalized, and a zero, negative or
        non-finite duration snaps to the target on the next frame.
        """
        self._release_handle()

        self._start = self._pov
        self._target = target.normalized()
        self._duration_ms = duration_ms if isfinite(duration_ms) and duration_ms > 0 else 0.0
        self._elapsed_ms = 0.0
        self._easing_name, self._easing = resolve_easing(easing)

        logger.debug(
            f"[CAMERA] {self._start} -> {self._target} over {self._duration_ms:.0f} ms ({self._easing_name})"
        )
        self._start_frames()

    def jump_to(self, pov: CameraPOV) -> None:
        """Cancel any transition and set the POV immediately."""
        self._stop_frames()
        self._target = None
        self._write(pov.normalized())

    def zoom(self, factor: float, duration_ms: float = CameraConfig.ZOOM_DURATION_MS) -> None:
        """Multiply the altitude by factor, clamped to the zoom range.

        Zooming during a transition keeps heading for that transition's
        lat/lng so the two do not fight.
        """
        if not isfinite(factor) or factor <= 0:
            logger.warning(f"[CAMERA] Ignoring zoom factor {factor}")
            return
        base = self._target or self._pov
        altitude = max(CameraConfig.MIN_ALTITUDE, min(CameraConfig.MAX_ALTITUDE, self._pov.altitude * factor))
        self.animate_to(base.with_altitude(altitude), duration_ms=duration_ms, easing=CameraConfig.ZOOM_EASING)

    def stop(self) -> None:
        """Cancel the running transition, keeping the current POV."""
        if self._target is not None:
            logger.debug(f"[CAMERA] stopped at {self._pov}")
        self._stop_frames()
        self._target = None

    # ==========================================================================
    # Frame callback
    # ==========================================================================

    def _on_frame(self, timestamp_ms: float) -> None:
        if self._target is None:
            self._stop_frames()
            return

        self._elapsed_ms += self._frame_delta(timestamp_ms)
        if self._duration_ms <= 0:
            t = 1.0
        else:
            t = max(0.0, min(1.0, self._elapsed_ms / self._duration_ms))

        if t >= 1.0:
            target = self._target
            self._target = None
            self._stop_frames()
            self._write(target)
            return

        self._write(CoordinateProjector.interpolate_pov(self._start, self._target, self._easing(t)))
        self._continue_frames()

    def _write(self, pov: CameraPOV) -> None:
        self._pov = pov
        for listener in list(self._listeners):
            listener(pov)

    def __repr__(self) -> str:
        status = f"-> {self._target}" if self._target is not None else "idle"
        return f"CameraAnimator({self._pov}, {status})"
