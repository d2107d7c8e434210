from enum import Enum
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.responses import StreamingResponse

from ytclip.core.errors import InvalidRequestError, PipelineError
from ytclip.core.logging import log_debug, log_error, log_info
from ytclip.models.internal import TrimRange
from ytclip.models.request import DownloadRequest
from ytclip.services.delivery import DeliveryStage
from ytclip.services.fetch import FetchStage
from ytclip.services.trim import TrimStage
from ytclip.utils.identifier import extract_video_id, source_url
from ytclip.utils.locale import safe_url_for_log
from ytclip.utils.naming import display_filename, make_token, output_path, working_directory
from ytclip.utils.timecode import calculate_duration, parse_clock

class PipelineState(str, Enum):
    VALIDATING = "validating"
    FETCHING = "fetching"
    TRIMMING = "trimming"
    DELIVERING = "delivering"
    DONE = "done"
    FAILED = "failed"

class Pipeline:
    """
    One download request: validate -> fetch -> (trim) -> deliver.
    Owns its token and the artifacts created under it until delivery takes over.
    """

    def __init__(
        self,
        download_request: DownloadRequest,
        request: Optional[Request] = None,
        directory: Optional[Path] = None
    ):
        self.download_request = download_request
        self.request = request
        self.directory = Path(directory) if directory else working_directory()
        self.token = make_token()
        self.state = PipelineState.VALIDATING
        self.video_id: Optional[str] = None
        self.trim_range: Optional[TrimRange] = None

    def _transition(self, new_state: PipelineState) -> None:
        log_debug(self.request, f"Pipeline {self.token}: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def validate(self) -> None:
        """Fail closed before any process is started"""
        req = self.download_request
        if not req.url:
            raise InvalidRequestError("url missing", message_key="error.url_required")

        self.video_id = extract_video_id(req.url)
        if not self.video_id:
            raise InvalidRequestError(
                f"no video id in {safe_url_for_log(req.url)}", message_key="error.invalid_url"
            )

        if not req.has_range:
            return
        if not (req.start_time and req.end_time):
            raise InvalidRequestError("only one range bound given", message_key="error.incomplete_range")

        try:
            start = parse_clock(req.start_time)
            end = parse_clock(req.end_time)
        except ValueError as e:
            raise InvalidRequestError(str(e), message_key="error.invalid_time")
        if end <= start:
            raise InvalidRequestError(
                f"{req.end_time} is not after {req.start_time}", message_key="error.invalid_range"
            )

        self.trim_range = TrimRange(
            start=req.start_time,
            end=req.end_time,
            duration=calculate_duration(req.start_time, req.end_time)
        )

    async def run(self) -> StreamingResponse:
        req = self.download_request
        try:
            self.validate()
            log_info(self.request, f"Processing download for video: {self.video_id}")

            self._transition(PipelineState.FETCHING)
            artifact = await FetchStage(self.directory, self.request).run(
                source_url(self.video_id), req.format, req.quality, self.token
            )
            filename = display_filename(self.video_id, req.format)

            if self.trim_range:
                self._transition(PipelineState.TRIMMING)
                artifact = await TrimStage(self.request).run(
                    artifact,
                    self.trim_range,
                    output_path(self.directory, self.token, req.format),
                    req.format
                )
                filename = display_filename(self.video_id, req.format, trimmed=True)

            self._transition(PipelineState.DELIVERING)
            return DeliveryStage(self.request).deliver(
                artifact,
                filename,
                req.format,
                on_finished=lambda: self._transition(PipelineState.DONE)
            )

        except PipelineError as e:
            log_error(self.request, f"Pipeline {self.token} failed in {self.state.value}: {e.detail}")
            self._transition(PipelineState.FAILED)
            raise
        except Exception as e:
            log_error(self.request, f"Server error: {str(e)}")
            self._transition(PipelineState.FAILED)
            raise PipelineError(str(e)) from e
