"""
Studio state
Immutable state of the single-user studio, advanced only through events
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from services.models import GeneratedImage, ImageRole, SourceImage


@dataclass(frozen=True)
class StudioState:
    garment: Optional[SourceImage] = None
    model: Optional[SourceImage] = None
    pose: str = ""
    background: str = ""
    is_generating: bool = False
    result: Optional[GeneratedImage] = None
    error: Optional[str] = None


# ============================================
# EVENTS
# ============================================

@dataclass(frozen=True)
class UploadImage:
    role: ImageRole
    image: SourceImage


@dataclass(frozen=True)
class ClearImage:
    role: ImageRole


@dataclass(frozen=True)
class SetPose:
    text: str


@dataclass(frozen=True)
class SetBackground:
    text: str


@dataclass(frozen=True)
class StartGenerate:
    pass


@dataclass(frozen=True)
class GenerateSucceeded:
    result: GeneratedImage


@dataclass(frozen=True)
class GenerateFailed:
    message: str


@dataclass(frozen=True)
class GenerateAborted:
    """Generation stopped because the credential was revoked"""


StudioEvent = Union[
    UploadImage, ClearImage, SetPose, SetBackground,
    StartGenerate, GenerateSucceeded, GenerateFailed, GenerateAborted,
]


def reduce(state: StudioState, event: StudioEvent) -> StudioState:
    """Return the state that follows from applying event to state"""
    if isinstance(event, UploadImage):
        return replace(state, **{event.role.value: event.image}, error=None)
    if isinstance(event, ClearImage):
        return replace(state, **{event.role.value: None})
    if isinstance(event, SetPose):
        return replace(state, pose=event.text)
    if isinstance(event, SetBackground):
        return replace(state, background=event.text)
    if isinstance(event, StartGenerate):
        # The previous result stays visible until the new call resolves
        return replace(state, is_generating=True, error=None)
    if isinstance(event, GenerateSucceeded):
        return replace(state, is_generating=False, result=event.result, error=None)
    if isinstance(event, GenerateFailed):
        return replace(state, is_generating=False, error=event.message)
    if isinstance(event, GenerateAborted):
        return replace(state, is_generating=False)
    raise TypeError(f"Unknown studio event: {event!r}")


class StudioStore:
    """Holds the current studio state"""

    def __init__(self, state: Optional[StudioState] = None):
        self._state = state or StudioState()

    @property
    def state(self) -> StudioState:
        return self._state

    def dispatch(self, event: StudioEvent) -> StudioState:
        self._state = reduce(self._state, event)
        return self._state
