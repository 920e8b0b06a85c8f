import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.features.analysis.services.lighthouse import LighthouseRunner
from app.features.analysis.services.orchestrator import AnalysisOrchestrator
from app.platform.exceptions import AnalyzerError, LighthouseError


def _process(stdout=b"", stderr=b"", returncode=0):
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.wait = AsyncMock(return_value=returncode)
    proc.returncode = returncode
    return proc


@pytest.fixture
def runner():
    return LighthouseRunner(executable="lighthouse", timeout=5)


def test_build_command(runner):
    cmd = runner.build_command("https://example.com")

    assert cmd[:2] == ["lighthouse", "https://example.com"]
    assert "--output=json" in cmd
    assert "--output-path=stdout" in cmd
    assert "--only-categories=performance,accessibility,best-practices" in cmd
    assert "--chrome-flags=--headless --no-sandbox --disable-gpu" in cmd


@pytest.mark.asyncio
async def test_run_returns_report(runner, lighthouse_report):
    proc = _process(stdout=json.dumps(lighthouse_report).encode())

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as spawn:
        report = await runner.run("https://example.com")

    assert report == lighthouse_report
    assert spawn.await_args.args[:2] == ("lighthouse", "https://example.com")


@pytest.mark.asyncio
async def test_missing_binary(runner):
    with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError("lighthouse"))):
        with pytest.raises(LighthouseError, match="Could not start Lighthouse"):
            await runner.run("https://example.com")


@pytest.mark.asyncio
async def test_non_zero_exit_uses_last_stderr_line(runner):
    proc = _process(stderr=b"Launching Chrome\nRuntime error encountered: ERRORED_DOCUMENT_REQUEST\n", returncode=1)

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(LighthouseError, match="ERRORED_DOCUMENT_REQUEST"):
            await runner.run("https://example.com")


@pytest.mark.asyncio
async def test_invalid_json(runner):
    proc = _process(stdout=b"<html>not json</html>")

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(LighthouseError, match="Could not parse"):
            await runner.run("https://example.com")


@pytest.mark.asyncio
async def test_runtime_error_in_report(runner, lighthouse_report):
    lighthouse_report["runtimeError"] = {"code": "NO_FCP", "message": "The page did not paint any content."}
    proc = _process(stdout=json.dumps(lighthouse_report).encode())

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(LighthouseError, match="did not paint"):
            await runner.run("https://example.com")


@pytest.mark.asyncio
async def test_timeout_kills_process():
    runner = LighthouseRunner(executable="lighthouse", timeout=0.1)

    async def hang():
        await asyncio.sleep(5)

    proc = _process()
    proc.returncode = None
    proc.communicate = hang

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(LighthouseError, match="timed out"):
            await runner.run("https://example.com")

    proc.kill.assert_called_once()
    proc.wait.assert_awaited_once()


def _hanging_process():
    async def hang():
        await asyncio.sleep(30)

    proc = _process()
    proc.returncode = None
    proc.communicate = hang
    return proc


@pytest.mark.asyncio
async def test_cancelled_run_kills_process():
    runner = LighthouseRunner(executable="lighthouse", timeout=60)
    proc = _hanging_process()

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        task = asyncio.create_task(runner.run("https://example.com"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    proc.kill.assert_called_once()
    proc.wait.assert_awaited_once()


@pytest.mark.asyncio
async def test_request_timeout_kills_lighthouse(image_host, browser_factory, mock_driver):
    runner = LighthouseRunner(executable="lighthouse", timeout=60)
    orchestrator = AnalysisOrchestrator(
        image_host=image_host,
        lighthouse=runner,
        browser_factory=browser_factory,
        timeout=0.2,
    )
    proc = _hanging_process()

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        with pytest.raises(AnalyzerError, match="timed out after 0.2 seconds"):
            await orchestrator.analyze("https://example.com")

    proc.kill.assert_called_once()
    proc.wait.assert_awaited_once()
    mock_driver.quit.assert_called_once()


@pytest.mark.asyncio
async def test_finished_process_is_not_killed(runner, lighthouse_report):
    proc = _process(stdout=json.dumps(lighthouse_report).encode())

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        await runner.run("https://example.com")

    proc.kill.assert_not_called()
