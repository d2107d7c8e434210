from typing import List, NamedTuple, Optional
import asyncio
from contextlib import suppress

READ_CHUNK = 64 * 1024

class CompletedProcess(NamedTuple):
    """Subprocess result"""
    returncode: int
    stdout: bytes
    stderr: bytes

class OutputLimitExceeded(Exception):
    """A subprocess wrote more than the allowed buffer"""

async def _read_capped(stream: asyncio.StreamReader, limit: Optional[int]) -> bytes:
    buffer = bytearray()
    while True:
        chunk = await stream.read(READ_CHUNK)
        if not chunk:
            break
        buffer.extend(chunk)
        if limit is not None and len(buffer) > limit:
            raise OutputLimitExceeded(f"output exceeded {limit} bytes")
    return bytes(buffer)

class SubprocessExecutor:
    """Execute subprocess with consistent error handling"""
    
    @staticmethod
    async def run(
        cmd: List[str],
        timeout: float,
        max_output: Optional[int] = None
    ) -> CompletedProcess:
        """
        Run subprocess with timeout, output cap and proper cleanup.
        On timeout or overflow the process is killed and the error re-raised.
        """
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            stdin=asyncio.subprocess.DEVNULL
        )
        
        collect = asyncio.gather(
            _read_capped(process.stdout, max_output),
            _read_capped(process.stderr, max_output),
            process.wait()
        )
        
        try:
            stdout, stderr, returncode = await asyncio.wait_for(collect, timeout=timeout)
            
            return CompletedProcess(
                returncode=returncode,
                stdout=stdout,
                stderr=stderr
            )
            
        except asyncio.TimeoutError:
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise
        except Exception:
            if process.returncode is None:
                with suppress(ProcessLookupError):
                    process.kill()
                await process.wait()
            collect.cancel()
            raise

def stderr_tail(result: CompletedProcess, max_lines: int = 20) -> str:
    """Last lines of stderr for server-side logs"""
    lines = result.stderr.decode(errors="replace").strip().splitlines()
    return "\n".join(lines[-max_lines:])
