import asyncio
from pathlib import Path

import pytest

from ytclip.config.settings import config
from ytclip.services.process import CompletedProcess, SubprocessExecutor


class FakeProcesses:
    """Stands in for yt-dlp/ffmpeg: writes the files a real run would leave behind"""

    def __init__(self):
        self.commands = []
        self.fetch_ext = "mp4"
        self.fetch_returncode = 0
        self.fetch_timeout = False
        self.fetch_writes_file = True
        self.trim_returncode = 0
        self.trim_timeout = False
        self.trim_sources_seen = []

    async def run(self, cmd, timeout, max_output=None):
        self.commands.append(list(cmd))
        # Yield so concurrent pipelines interleave
        await asyncio.sleep(0)
        if "-i" in cmd:
            return self._trim(cmd)
        return self._fetch(cmd)

    def _fetch(self, cmd):
        if self.fetch_timeout:
            raise asyncio.TimeoutError()
        if self.fetch_returncode != 0:
            return CompletedProcess(self.fetch_returncode, b"", b"ERROR: [youtube] Sign in to confirm")
        template = cmd[cmd.index("-o") + 1]
        if self.fetch_writes_file:
            target = Path(template.replace("%(ext)s", self.fetch_ext))
            target.write_bytes(f"media for {cmd[-1]}".encode())
        return CompletedProcess(0, b"", b"")

    def _trim(self, cmd):
        source = Path(cmd[cmd.index("-i") + 1])
        self.trim_sources_seen.append((source, source.exists()))
        if self.trim_timeout:
            raise asyncio.TimeoutError()
        output = Path(cmd[-1])
        output.write_bytes(b"partial")
        if self.trim_returncode != 0:
            return CompletedProcess(self.trim_returncode, b"", b"Invalid duration")
        output.write_bytes(b"trimmed " + source.name.encode())
        return CompletedProcess(0, b"", b"")

    def fetch_commands(self):
        return [c for c in self.commands if "-i" not in c]

    def trim_commands(self):
        return [c for c in self.commands if "-i" in c]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    directory = tmp_path / "downloads"
    directory.mkdir()
    monkeypatch.setattr(config.workdir, "path", str(directory))
    return directory


@pytest.fixture
def fake_processes(monkeypatch):
    fake = FakeProcesses()
    monkeypatch.setattr(SubprocessExecutor, "run", staticmethod(fake.run))
    return fake


@pytest.fixture
def removals(monkeypatch):
    """Record scheduled post-delivery deletions instead of running them"""
    scheduled = []

    def record(path, delay):
        scheduled.append((Path(path), delay))

    monkeypatch.setattr("ytclip.services.delivery.schedule_removal", record)
    return scheduled
