from .errors import (
    ArtifactNotFoundError,
    FetchError,
    InvalidRequestError,
    PipelineError,
    TrimError,
)

__all__ = [
    "ArtifactNotFoundError",
    "FetchError",
    "InvalidRequestError",
    "PipelineError",
    "TrimError",
]
