import asyncio
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from rich.console import Console

from ytclip.api import download, health
from ytclip.config.settings import config
from ytclip.core.errors import PipelineError
from ytclip.core.logging import setup_logging
from ytclip.core.state import state
from ytclip.i18n import i18n
from ytclip.services.cleanup import Reaper
from ytclip.services.ffmpeg import FFmpegCommandBuilder
from ytclip.services.process import SubprocessExecutor
from ytclip.services.ytdlp import YTDLPCommandBuilder, resolve_ytdlp_binary
from ytclip.utils.locale import get_locale
from ytclip.utils.naming import working_directory

console = Console()

app = FastAPI(
    title=config.api.title,
    description=config.api.description,
    version=config.api.version,
    docs_url="/docs" if config.api.debug else None,
    redoc_url=None
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, tags=["Health"])
app.include_router(download.router, tags=["Download"])

@app.middleware("http")
async def assign_request_id(request: Request, call_next):
    request.state.request_id = uuid.uuid4().hex[:12]
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response

@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    """Coarse, translated message only; details were logged where they happened"""
    locale = get_locale(request.headers.get("accept-language"))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": i18n.get(exc.message_key, locale=locale)}
    )

async def probe_tool(cmd: list) -> str:
    """First line of `<tool> --version`, or 'missing'"""
    try:
        result = await SubprocessExecutor.run(cmd, timeout=15.0)
    except (OSError, asyncio.TimeoutError) as e:
        console.print(f"[yellow]⚠ {cmd[0]} unavailable: {str(e)}[/yellow]")
        return "missing"
    if result.returncode != 0:
        return "missing"
    lines = result.stdout.decode(errors="replace").strip().splitlines()
    return lines[0] if lines else "unknown"

@app.on_event("startup")
async def startup_event():
    setup_logging()

    directory = working_directory()
    console.print(f"[green]✓ Working directory: {directory}[/green]")
    console.print(f"[dim]Environment: {config.environment}[/dim]")

    state.reaper = Reaper(
        directory,
        retention_seconds=config.workdir.retention_seconds,
        interval_seconds=config.workdir.sweep_interval_seconds
    )
    state.reaper.start()

    state.ytdlp_binary = resolve_ytdlp_binary()
    state.ytdlp_version = await probe_tool(YTDLPCommandBuilder.build_version_command())
    state.ffmpeg_version = await probe_tool(FFmpegCommandBuilder.build_version_command())

    if state.ytdlp_version == "missing":
        console.print("[red]✗ WARNING: yt-dlp not found[/red]")
    else:
        console.print(f"[green]✓ yt-dlp: {state.ytdlp_version}[/green]")
    if state.ffmpeg_version == "missing":
        console.print("[red]✗ WARNING: ffmpeg not found[/red]")
    else:
        console.print("[green]✓ ffmpeg: installed[/green]")

@app.on_event("shutdown")
async def shutdown_event():
    if state.reaper:
        await state.reaper.stop()
        state.reaper = None
        console.print("[dim]✓ Reaper stopped[/dim]")
