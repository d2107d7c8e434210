class PipelineError(Exception):
    """
    Base pipeline failure.
    message_key is the client-facing (translated) message; detail stays server-side.
    """
    status_code = 500
    message_key = "error.server"

    def __init__(self, detail: str = "", message_key: str = None):
        super().__init__(detail or self.message_key)
        self.detail = detail
        if message_key:
            self.message_key = message_key

class InvalidRequestError(PipelineError):
    """Missing URL, unrecognized identifier or malformed time range"""
    status_code = 400
    message_key = "error.invalid_request"

class FetchError(PipelineError):
    """yt-dlp exited non-zero, timed out or could not be started"""
    message_key = "error.download_failed"

class ArtifactNotFoundError(FetchError):
    """Fetched (or trimmed) file is missing from the working directory"""
    message_key = "error.file_not_found"

class TrimError(PipelineError):
    """ffmpeg exited non-zero or timed out"""
    message_key = "error.trim_failed"
