from typing import Callable, Optional
from urllib.parse import quote

import aiofiles
from fastapi import Request
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from ytclip.config.settings import config
from ytclip.core.errors import ArtifactNotFoundError
from ytclip.core.logging import log_error, log_info
from ytclip.models.internal import WorkingArtifact
from ytclip.services.cleanup import schedule_removal
from ytclip.services.format import FormatDecision

CHUNK_SIZE = 4 * 1024 * 1024

class FileStreamResponse(StreamingResponse):
    """
    StreamingResponse that runs on_close exactly once, whether the body was
    fully sent, failed midway, or never started (client gone before headers).
    """

    def __init__(self, content, on_close: Callable[[], None], **kwargs):
        super().__init__(content, **kwargs)
        self._on_close = on_close
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._on_close()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.close()

class DeliveryStage:
    """Stream the final artifact, then delete it after a grace delay"""

    def __init__(self, request: Optional[Request] = None, grace_seconds: Optional[float] = None):
        self.request = request
        self.grace_seconds = (
            config.workdir.delivery_grace_seconds if grace_seconds is None else grace_seconds
        )

    def deliver(
        self,
        artifact: WorkingArtifact,
        filename: str,
        media_format: str,
        on_finished: Optional[Callable[[], None]] = None
    ) -> FileStreamResponse:
        path = artifact.path
        try:
            file_size = path.stat().st_size
        except OSError as e:
            log_error(self.request, f"Artifact vanished before delivery: {str(e)}")
            raise ArtifactNotFoundError(str(e))

        log_info(self.request, f"Sending {filename} ({file_size / 1024 / 1024:.1f} MB)")

        def finish():
            schedule_removal(path, self.grace_seconds)
            if on_finished:
                on_finished()

        async def generate():
            try:
                async with aiofiles.open(path, 'rb') as f:
                    while True:
                        chunk = await f.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        yield chunk
            except Exception as e:
                # Headers are already out; nothing to report to the client
                log_error(self.request, f"Download send error: {str(e)}")
            finally:
                response.close()

        encoded_filename = quote(filename)
        ascii_filename = filename.encode("ascii", "ignore").decode() or f"download.{media_format}"
        headers = {
            'Content-Disposition': (
                f'attachment; filename="{ascii_filename}"; '
                f"filename*=UTF-8''{encoded_filename}"
            ),
            'X-Content-Type-Options': 'nosniff',
            'Cache-Control': 'no-cache',
            'Content-Length': str(file_size),
        }

        response = FileStreamResponse(
            generate(),
            on_close=finish,
            media_type=FormatDecision.get_metadata(media_format).media_type,
            headers=headers
        )
        return response
