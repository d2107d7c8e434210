import asyncio
import logging
import os
import time
from contextlib import suppress
from pathlib import Path
from typing import Optional, Set

from ytclip.models.internal import CleanupResult, ReaperReport

logger = logging.getLogger(__name__)

# Keeps scheduled deletions referenced until they finish
_pending_removals: Set[asyncio.Task] = set()


def remove_file(path: Path) -> CleanupResult:
    """Delete a file, never raising. Missing files count as not removed."""
    path = Path(path)
    try:
        os.remove(path)
        return CleanupResult(path=path, removed=True)
    except FileNotFoundError:
        return CleanupResult(path=path, removed=False)
    except OSError as e:
        logger.warning(f"Cleanup error for {path}: {str(e)}")
        return CleanupResult(path=path, removed=False, error=str(e))


async def remove_after(path: Path, delay: float) -> CleanupResult:
    """Sleep, then delete path"""
    await asyncio.sleep(delay)
    result = remove_file(path)
    if result.removed:
        logger.info(f"Removed delivered file {Path(path).name}")
    return result


def schedule_removal(path: Path, delay: float) -> asyncio.Task:
    """Delete path after delay without blocking the caller"""
    task = asyncio.create_task(remove_after(path, delay))
    _pending_removals.add(task)
    task.add_done_callback(_pending_removals.discard)
    return task


def pending_removals() -> int:
    return len(_pending_removals)


class Reaper:
    """
    Periodically deletes files older than the retention threshold from the
    working directory. Does not coordinate with running pipelines.
    """

    def __init__(self, directory: Path, retention_seconds: float, interval_seconds: float):
        self.directory = Path(directory)
        self.retention_seconds = retention_seconds
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    def sweep(self, now: Optional[float] = None) -> ReaperReport:
        """Delete every non-directory entry whose mtime age >= retention"""
        now = time.time() if now is None else now
        report = ReaperReport()

        try:
            entries = list(os.scandir(self.directory))
        except OSError as e:
            logger.error(f"Cleanup error: cannot list {self.directory}: {str(e)}")
            return report

        for entry in entries:
            report.scanned += 1
            try:
                if entry.is_dir(follow_symlinks=False):
                    continue
                age = now - entry.stat(follow_symlinks=False).st_mtime
                if age < self.retention_seconds:
                    continue
            except OSError as e:
                logger.warning(f"Failed to stat {entry.path}: {str(e)}")
                report.failed += 1
                continue

            result = remove_file(Path(entry.path))
            if result.removed:
                report.removed += 1
            elif not result.ok:
                report.failed += 1

        if report.removed > 0:
            logger.info(f"Cleaned up {report.removed} old file(s)")
        return report

    async def run_forever(self) -> None:
        """Sweep now, then every interval until cancelled"""
        while True:
            try:
                await asyncio.to_thread(self.sweep)
            except Exception as e:
                logger.error(f"Error in reaper: {str(e)}")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever(), name="reaper")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
