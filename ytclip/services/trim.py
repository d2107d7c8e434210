import asyncio
from pathlib import Path
from typing import Optional

from fastapi import Request

from ytclip.config.settings import config
from ytclip.core.errors import TrimError
from ytclip.core.logging import log_error, log_info, log_warning
from ytclip.models.internal import ArtifactRole, TrimRange, WorkingArtifact
from ytclip.services.cleanup import remove_file
from ytclip.services.ffmpeg import FFmpegCommandBuilder
from ytclip.services.process import OutputLimitExceeded, SubprocessExecutor, stderr_tail

class TrimStage:
    """Cut a range out of a fetched file with ffmpeg; the source never survives"""

    def __init__(self, request: Optional[Request] = None):
        self.request = request

    async def run(
        self,
        source: WorkingArtifact,
        trim: TrimRange,
        output: Path,
        media_format: str
    ) -> WorkingArtifact:
        cmd = FFmpegCommandBuilder.build_trim_command(
            source.path, trim.start, trim.duration, output, media_format
        )
        log_info(self.request, f"Trimming {source.path.name} from {trim.start} for {trim.duration}")

        try:
            try:
                result = await SubprocessExecutor.run(
                    cmd,
                    timeout=config.process.timeout_seconds,
                    max_output=config.process.max_output_bytes
                )
            finally:
                cleanup = remove_file(source.path)
                if not cleanup.ok:
                    log_warning(self.request, f"Pre-trim file not removed: {cleanup.error}")
        except asyncio.TimeoutError:
            log_error(self.request, f"Trimming timed out after {config.process.timeout_seconds}s")
            remove_file(output)
            raise TrimError("ffmpeg timed out")
        except (OutputLimitExceeded, OSError) as e:
            log_error(self.request, f"Trimming error: {str(e)}")
            remove_file(output)
            raise TrimError(str(e))

        if result.returncode != 0:
            log_error(self.request, f"Trimming error (exit {result.returncode}): {stderr_tail(result)}")
            remove_file(output)
            raise TrimError(f"ffmpeg exited with {result.returncode}")

        return WorkingArtifact(path=Path(output), token=source.token, role=ArtifactRole.OUTPUT)
