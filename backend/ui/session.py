from enum import Enum
from typing import Optional

class EditorState(str, Enum):
    IDLE = "idle"
    CAPTURED = "captured"
    TRANSFORMING = "transforming"
    DISPLAYED = "displayed"

class EditorSessionError(Exception):
    pass

class EditorSession:
    """
    Per-user editor state.

    idle -> captured -> (transforming)* -> displayed, with reset() returning
    to idle. Only one transform may be pending at a time.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.state = EditorState.IDLE
        self.image_bytes: Optional[bytes] = None
        self.mime_type: Optional[str] = None
        self.filename: Optional[str] = None
        self.selected_effect: Optional[str] = None
        self.result_url: Optional[str] = None
        self._state_before_transform: Optional[EditorState] = None

    def capture(self, image_bytes: bytes, mime_type: str, filename: str) -> None:
        if self.state == EditorState.TRANSFORMING:
            raise EditorSessionError("Cannot replace the image while a transform is pending")
        self.image_bytes = image_bytes
        self.mime_type = mime_type
        self.filename = filename
        self.selected_effect = None
        self.result_url = None
        self.state = EditorState.CAPTURED

    @property
    def can_transform(self) -> bool:
        return self.state in (EditorState.CAPTURED, EditorState.DISPLAYED)

    def begin_transform(self, effect: str) -> None:
        if self.state == EditorState.TRANSFORMING:
            raise EditorSessionError("A transform is already in progress")
        if not self.can_transform:
            raise EditorSessionError("No image file available")
        self._state_before_transform = self.state
        self.selected_effect = effect
        self.state = EditorState.TRANSFORMING

    def finish_transform(self, url: str) -> None:
        self._require_pending()
        self.result_url = url
        self.state = EditorState.DISPLAYED
        self._state_before_transform = None

    def fail_transform(self) -> None:
        """Return to the state held before the request was issued."""
        self._require_pending()
        self.state = self._state_before_transform
        self._state_before_transform = None

    def _require_pending(self) -> None:
        if self.state != EditorState.TRANSFORMING:
            raise EditorSessionError("No transform is in progress")
