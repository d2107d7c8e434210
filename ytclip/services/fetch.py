import asyncio
import re
from pathlib import Path
from typing import Optional

from fastapi import Request

from ytclip.config.settings import config
from ytclip.core.errors import ArtifactNotFoundError, FetchError
from ytclip.core.logging import log_error, log_info, log_warning
from ytclip.models.internal import ArtifactRole, WorkingArtifact
from ytclip.services.process import OutputLimitExceeded, SubprocessExecutor, stderr_tail
from ytclip.services.ytdlp import YTDLPCommandBuilder
from ytclip.utils.naming import temp_prefix

# yt-dlp leftovers that are never the finished artifact
PARTIAL_SUFFIXES = (".part", ".ytdl", ".temp")

# Per-format downloads kept before merging, e.g. "{token}_temp.f137.mp4"
FORMAT_INTERMEDIATE = re.compile(r"\.f\d+\.")

class FetchStage:
    """Run yt-dlp into the working directory and locate what it produced"""

    def __init__(self, directory: Path, request: Optional[Request] = None):
        self.directory = Path(directory)
        self.request = request

    async def run(self, url: str, media_format: str, quality: str, token: str) -> WorkingArtifact:
        prefix = temp_prefix(self.directory, token)
        cmd = YTDLPCommandBuilder.build_fetch_command(url, media_format, quality, f"{prefix}.%(ext)s")

        try:
            result = await SubprocessExecutor.run(
                cmd,
                timeout=config.process.timeout_seconds,
                max_output=config.process.max_output_bytes
            )
        except asyncio.TimeoutError:
            log_error(self.request, f"Download timed out after {config.process.timeout_seconds}s")
            raise FetchError("yt-dlp timed out")
        except OutputLimitExceeded as e:
            log_error(self.request, f"Download error: {str(e)}")
            raise FetchError(str(e))
        except OSError as e:
            log_error(self.request, f"Cannot start yt-dlp: {str(e)}")
            raise FetchError(str(e))

        if result.returncode != 0:
            log_error(self.request, f"Download error (exit {result.returncode}): {stderr_tail(result)}")
            raise FetchError(f"yt-dlp exited with {result.returncode}")

        return self.locate(token, media_format)

    def locate(self, token: str, media_format: str) -> WorkingArtifact:
        """Find the file yt-dlp wrote; its extension is not known in advance"""
        name_prefix = temp_prefix(self.directory, token).name
        found_files = sorted(
            entry for entry in self.directory.iterdir()
            if entry.name.startswith(name_prefix) and not entry.name.endswith(PARTIAL_SUFFIXES)
        )
        if not found_files:
            log_error(self.request, f"No file starting with {name_prefix} after download")
            raise ArtifactNotFoundError(f"no artifact for {name_prefix}")

        # Requested container first, then anything that is not a pre-merge stream
        expected = f"{name_prefix}.{media_format}"
        exact = [entry for entry in found_files if entry.name == expected]
        merged = [entry for entry in found_files if not FORMAT_INTERMEDIATE.search(entry.name)]
        chosen = (exact or merged or found_files)[0]

        if len(found_files) > 1:
            log_warning(self.request, f"{len(found_files)} candidates for {name_prefix}, using {chosen.name}")

        log_info(self.request, f"Downloaded {chosen.name}")
        return WorkingArtifact(path=chosen, token=token, role=ArtifactRole.TEMP)
