import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

from app.platform.config import settings
from app.platform.exceptions import LighthouseError
from app.platform.logger import get_logger

logger = get_logger("lighthouse_runner")

LIGHTHOUSE_CATEGORIES = ("performance", "accessibility", "best-practices")
CHROME_FLAGS = "--headless --no-sandbox --disable-gpu"


class LighthouseRunner:
    """
    Runs the Lighthouse CLI against a URL.

    Lighthouse launches and kills its own Chrome; nothing here touches the
    driver used for the screenshot.
    """

    def __init__(
        self,
        executable: Optional[str] = None,
        timeout: Optional[int] = None,
        categories: Sequence[str] = LIGHTHOUSE_CATEGORIES,
    ):
        self.executable = executable or settings.LIGHTHOUSE_PATH
        self.timeout = timeout or settings.LIGHTHOUSE_TIMEOUT
        self.categories = tuple(categories)

    def build_command(self, url: str) -> List[str]:
        return [
            self.executable,
            url,
            "--output=json",
            "--output-path=stdout",
            "--quiet",
            f"--only-categories={','.join(self.categories)}",
            f"--chrome-flags={CHROME_FLAGS}",
        ]

    async def run(self, url: str) -> Dict[str, Any]:
        """
        Returns the parsed Lighthouse result (``lhr``).

        Raises:
            LighthouseError: missing binary, timeout, non-zero exit or bad JSON
        """
        cmd = self.build_command(url)
        logger.info(f"Running Lighthouse for {url}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise LighthouseError(f"Could not start Lighthouse ({self.executable}): {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise LighthouseError(f"Lighthouse timed out after {self.timeout} seconds") from None
        finally:
            # also reached when the caller cancels us; Lighthouse must not outlive the request
            if proc.returncode is None:
                logger.warning(f"Killing Lighthouse for {url}")
                proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            reason = stderr.decode("utf-8", errors="replace").strip().splitlines()
            raise LighthouseError(
                reason[-1] if reason else f"Lighthouse exited with code {proc.returncode}"
            )

        try:
            report = json.loads(stdout)
        except ValueError as e:
            raise LighthouseError(f"Could not parse Lighthouse output: {e}") from e

        if not isinstance(report, dict) or "categories" not in report:
            raise LighthouseError("Lighthouse output has no categories")

        runtime_error = report.get("runtimeError")
        if isinstance(runtime_error, dict) and runtime_error.get("message"):
            raise LighthouseError(runtime_error["message"])

        return report
