import pytest
from httpx import ASGITransport, AsyncClient

from ytclip.main import app

URL = "https://youtube.com/watch?v=dQw4w9WgXcQ&t=5"


def client():
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health_check():
    """Test public health endpoint"""
    async with client() as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body
    assert "env" in body


@pytest.mark.asyncio
async def test_health_full(workdir):
    async with client() as ac:
        response = await ac.get("/health/full")
    assert response.status_code == 200
    assert response.json()["working_directory"] == str(workdir)


@pytest.mark.asyncio
async def test_missing_url_is_client_error(workdir, fake_processes):
    async with client() as ac:
        response = await ac.get("/download")
    assert response.status_code == 400
    assert response.json() == {"error": "URL is required"}
    assert fake_processes.commands == []


@pytest.mark.asyncio
async def test_invalid_url_is_client_error(workdir, fake_processes):
    async with client() as ac:
        response = await ac.get("/download", params={"url": "not a url"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid YouTube URL"}


@pytest.mark.asyncio
async def test_half_range_is_rejected(workdir, fake_processes):
    async with client() as ac:
        response = await ac.get("/download", params={"url": URL, "startTime": "0:00:10"})
    assert response.status_code == 400
    assert fake_processes.commands == []


@pytest.mark.asyncio
async def test_error_messages_are_translated(workdir, fake_processes):
    async with client() as ac:
        response = await ac.get("/download", headers={"Accept-Language": "ja,en;q=0.5"})
    assert response.status_code == 400
    assert response.json() == {"error": "URLは必須です"}


@pytest.mark.asyncio
async def test_fetch_timeout_is_generic_server_error(workdir, fake_processes):
    fake_processes.fetch_timeout = True
    async with client() as ac:
        response = await ac.get("/download", params={"url": URL})
    assert response.status_code == 500
    assert response.json() == {"error": "Download failed. YouTube may be blocking the request."}


@pytest.mark.asyncio
async def test_fetch_failure_does_not_leak_tool_output(workdir, fake_processes):
    fake_processes.fetch_returncode = 1
    async with client() as ac:
        response = await ac.get("/download", params={"url": URL})
    assert response.status_code == 500
    assert "Sign in" not in response.text


@pytest.mark.asyncio
async def test_trim_failure_is_server_error(workdir, fake_processes):
    fake_processes.trim_returncode = 1
    async with client() as ac:
        response = await ac.get(
            "/download", params={"url": URL, "startTime": "0:00:00", "endTime": "0:00:05"}
        )
    assert response.status_code == 500
    assert response.json() == {"error": "Trimming failed"}
    assert list(workdir.iterdir()) == []


@pytest.mark.asyncio
async def test_download_streams_file(workdir, fake_processes, removals):
    async with client() as ac:
        response = await ac.get(
            "/download", params={"url": URL, "format": "avi", "quality": "highest"}
        )
    assert response.status_code == 200
    assert response.content == b"media for https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert "dQw4w9WgXcQ.mp4" in response.headers["content-disposition"]
    assert response.headers["x-request-id"]

    cmd = fake_processes.fetch_commands()[0]
    assert cmd[cmd.index("-f") + 1].startswith("bestvideo[ext=mp4]+bestaudio[ext=m4a]")
    assert len(removals) == 1
