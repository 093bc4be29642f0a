"""Exception hierarchy for Facetizer."""


class FacetizerError(Exception):
    """Base exception for all Facetizer errors."""

    pass


class SceneError(FacetizerError):
    """Errors related to scene loading or saving."""

    pass


class SceneLoadError(SceneError):
    """Error loading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene file '{path}': {reason}")


class SceneSaveError(SceneError):
    """Error saving a faces file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save faces file '{path}': {reason}")


class SceneFormatError(SceneError):
    """Unsupported or invalid scene file content."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid scene file '{path}': {details}")


class ProcessingCancelledError(FacetizerError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
