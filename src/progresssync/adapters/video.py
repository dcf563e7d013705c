"""Video metrics: watch milestones, hotspots, and the interactive-video blend."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar

from progresssync.adapters.utils import payload_float, payload_str
from progresssync.contracts.adapter import MetricAdapter, ratio_percentage
from progresssync.contracts.progress import InteractionEvent

MILESTONE_STEP = 10


@dataclass(frozen=True)
class VideoState:
    current_time: float = 0.0
    duration: float = 0.0


@dataclass(frozen=True)
class HotspotState:
    hotspot_ids: frozenset[str]
    resolved: frozenset[str] = frozenset()


@dataclass(frozen=True)
class InteractiveVideoState:
    video: VideoState
    hotspots: HotspotState


def watch_milestone(state: VideoState) -> int:
    """Watched share snapped down to the nearest multiple of ten."""
    if state.duration <= 0 or state.current_time <= 0:
        return 0
    watched = ratio_percentage(state.current_time, state.duration)
    return watched // MILESTONE_STEP * MILESTONE_STEP


def _reduce_tick(state: VideoState, event: InteractionEvent) -> VideoState:
    current_time = payload_float(event.payload, "current_time")
    duration = payload_float(event.payload, "duration")
    if current_time is None and duration is None:
        return state
    return replace(
        state,
        current_time=state.current_time if current_time is None else max(0.0, current_time),
        duration=state.duration if duration is None else max(0.0, duration),
    )


def _reduce_hotspot(state: HotspotState, event: InteractionEvent) -> HotspotState:
    hotspot_id = payload_str(event.payload, "hotspot_id")
    if hotspot_id is None or hotspot_id not in state.hotspot_ids or hotspot_id in state.resolved:
        return state
    return replace(state, resolved=state.resolved | {hotspot_id})


class VideoAdapter(MetricAdapter[VideoState]):
    content_type: ClassVar[str] = "video"
    silent_events: ClassVar[frozenset[str]] = frozenset({"tick"})

    def __init__(self, *, duration: float = 0.0) -> None:
        self._duration = max(0.0, duration)

    def initial_state(self) -> VideoState:
        return VideoState(duration=self._duration)

    def reduce(self, state: VideoState, event: InteractionEvent) -> VideoState:
        if event.name == "tick":
            return _reduce_tick(state, event)
        return state

    def compute(self, state: VideoState) -> int:
        return watch_milestone(state)


class HotspotAdapter(MetricAdapter[HotspotState]):
    content_type: ClassVar[str] = "image-hotspot"

    def __init__(self, *, hotspot_ids: list[str] | tuple[str, ...]) -> None:
        self._hotspot_ids = frozenset(hotspot_ids)

    def initial_state(self) -> HotspotState:
        return HotspotState(hotspot_ids=self._hotspot_ids)

    def reduce(self, state: HotspotState, event: InteractionEvent) -> HotspotState:
        if event.name == "hotspot_completed":
            return _reduce_hotspot(state, event)
        return state

    def compute(self, state: HotspotState) -> int:
        return ratio_percentage(len(state.resolved), len(state.hotspot_ids))


class InteractiveVideoAdapter(MetricAdapter[InteractiveVideoState]):
    """Playback milestones and resolved hotspots feed one candidate; the larger wins."""

    content_type: ClassVar[str] = "interactive-video"
    silent_events: ClassVar[frozenset[str]] = frozenset({"tick"})

    def __init__(self, *, hotspot_ids: list[str] | tuple[str, ...] = (), duration: float = 0.0) -> None:
        self._video = VideoAdapter(duration=duration)
        self._hotspots = HotspotAdapter(hotspot_ids=hotspot_ids)

    def initial_state(self) -> InteractiveVideoState:
        return InteractiveVideoState(video=self._video.initial_state(), hotspots=self._hotspots.initial_state())

    def reduce(self, state: InteractiveVideoState, event: InteractionEvent) -> InteractiveVideoState:
        video = self._video.reduce(state.video, event)
        hotspots = self._hotspots.reduce(state.hotspots, event)
        if video is state.video and hotspots is state.hotspots:
            return state
        return InteractiveVideoState(video=video, hotspots=hotspots)

    def compute(self, state: InteractiveVideoState) -> int:
        return max(self._video.compute(state.video), self._hotspots.compute(state.hotspots))
