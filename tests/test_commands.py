from pathlib import Path

from ytclip.config.settings import config
from ytclip.core.state import state
from ytclip.services.ffmpeg import FFmpegCommandBuilder
from ytclip.services.format import FormatDecision
from ytclip.services.ytdlp import YTDLPCommandBuilder, resolve_ytdlp_binary

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def test_highest_quality_falls_back_through_containers():
    assert FormatDecision.decide("mp4", "highest") == (
        "bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]/best"
    )


def test_height_tier():
    assert FormatDecision.decide("mp4", "480p") == (
        "bestvideo[height<=480][ext=mp4]+bestaudio[ext=m4a]/best[height<=480]"
    )


def test_webm_pairs_with_webm_audio():
    assert "bestaudio[ext=webm]" in FormatDecision.decide("webm", "720p")


def test_audio_fetch_command():
    cmd = YTDLPCommandBuilder.build_fetch_command(URL, "mp3", "480p", "/w/t_temp.%(ext)s")
    assert cmd[0] == state.ytdlp_binary
    assert cmd[1:6] == ["-x", "--audio-format", "mp3", "--audio-quality", "0"]
    assert "-f" not in cmd
    assert cmd[cmd.index("--add-header") + 1] == "User-Agent:Mozilla/5.0"
    assert cmd[cmd.index("-o") + 1] == "/w/t_temp.%(ext)s"
    assert cmd[-1] == URL


def test_video_fetch_command():
    cmd = YTDLPCommandBuilder.build_fetch_command(URL, "mp4", "1080p", "/w/t_temp.%(ext)s")
    assert cmd[cmd.index("-f") + 1] == FormatDecision.decide("mp4", "1080p")
    assert cmd[cmd.index("--merge-output-format") + 1] == "mp4"
    assert "-x" not in cmd
    assert "--no-playlist" in cmd


def test_binary_resolution_prefers_config(monkeypatch):
    monkeypatch.setattr(config.ytdlp, "binary", "/opt/yt-dlp")
    assert resolve_ytdlp_binary() == "/opt/yt-dlp"


def test_binary_resolution_defaults_to_path(monkeypatch, tmp_path):
    monkeypatch.setattr(config.ytdlp, "binary", None)
    monkeypatch.chdir(tmp_path)
    assert resolve_ytdlp_binary() == "yt-dlp"
    (tmp_path / "yt-dlp").write_text("")
    assert resolve_ytdlp_binary() == "./yt-dlp"


def test_trim_command_for_video():
    cmd = FFmpegCommandBuilder.build_trim_command(
        Path("/w/in.mp4"), "0:01:10", "00:00:55", Path("/w/out.mp4"), "mp4"
    )
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-i") + 1] == "/w/in.mp4"
    assert cmd[cmd.index("-ss") + 1] == "0:01:10"
    assert cmd[cmd.index("-t") + 1] == "00:00:55"
    assert cmd[cmd.index("-c:v") + 1] == "libx264"
    assert cmd[cmd.index("-preset") + 1] == "ultrafast"
    assert cmd[cmd.index("-c:a") + 1] == "aac"
    assert cmd[-1] == "/w/out.mp4"


def test_trim_command_for_audio_drops_video():
    cmd = FFmpegCommandBuilder.build_trim_command(
        Path("in.mp3"), "0:00:00", "00:00:10", Path("out.mp3"), "mp3"
    )
    assert "-vn" in cmd
    assert "-c:v" not in cmd
    assert cmd[cmd.index("-c:a") + 1] == "libmp3lame"
