import asyncio
import sys

import pytest

from ytclip.services.process import OutputLimitExceeded, SubprocessExecutor, stderr_tail


@pytest.mark.asyncio
async def test_collects_output_and_exit_code():
    result = await SubprocessExecutor.run(
        [sys.executable, "-c", "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"],
        timeout=30
    )
    assert result.returncode == 3
    assert result.stdout.strip() == b"out"
    assert stderr_tail(result) == "err"


@pytest.mark.asyncio
async def test_timeout_kills_process():
    with pytest.raises(asyncio.TimeoutError):
        await SubprocessExecutor.run(
            [sys.executable, "-c", "import time; time.sleep(30)"],
            timeout=0.5
        )


@pytest.mark.asyncio
async def test_output_cap():
    with pytest.raises(OutputLimitExceeded):
        await SubprocessExecutor.run(
            [sys.executable, "-c", "import sys; sys.stdout.write('x' * 200000)"],
            timeout=30,
            max_output=1024
        )


@pytest.mark.asyncio
async def test_missing_binary_raises_oserror():
    with pytest.raises(OSError):
        await SubprocessExecutor.run(["definitely-not-a-real-binary-xyz"], timeout=5)
