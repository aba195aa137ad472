"""Travel Globe - clustering and flight-path camera animation for a 3D travel globe.

Turns a user's visited places into globe pins and a replayable journey:
- Great-circle clustering of nearby locations into weighted pins
- Sphere projection with seam-aware longitude interpolation
- Eased, cancellable camera transitions
- State machine-based multi-leg flight playback with a follow camera

Modules:
    core: Foundation (geodesy, projection, easing, frame scheduling, clustering)
    model: Data structures (Location, Cluster, FlightSegment, CameraPOV, events)
    animation: Frame-driven animators (CameraAnimator, FlightSequencer)
    globe: TravelGlobe engine facade
    settings: GlobeSettings runtime options

Example:
    from travelglobe.core import HostFrameScheduler
    from travelglobe.globe import TravelGlobe
    from travelglobe.settings import GlobeSettings
"""
