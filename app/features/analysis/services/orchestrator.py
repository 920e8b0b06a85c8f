import asyncio
from dataclasses import dataclass
from typing import Callable, Optional, Union

from selenium.webdriver.remote.webdriver import WebDriver
from starlette.concurrency import run_in_threadpool

from app.features.analysis.schemas.analysis import AnalysisResult, AuditFailure, CategoryScores
from app.features.analysis.services.browser import BrowserService, NavigationPreset
from app.features.analysis.services.findings import build_category_reports
from app.features.analysis.services.image_host import CloudinaryImageHost
from app.features.analysis.services.lighthouse import LighthouseRunner
from app.features.analysis.services.scoring import UNAVAILABLE, composite_score
from app.platform.config import settings
from app.platform.exceptions import AnalyzerError, MissingURLError
from app.platform.logger import get_logger

logger = get_logger("analysis_orchestrator")

ANALYSIS_DESCRIPTION = "Website analyzed successfully"
LIGHTHOUSE_FAILED = "Lighthouse analysis failed"

BrowserFactory = Callable[[NavigationPreset, int], WebDriver]


@dataclass
class PageCapture:
    title: str
    screenshot: str


class AnalysisOrchestrator:
    """
    Runs one /analyze request end to end.

    Pipeline: launch browser -> navigate -> screenshot -> release browser,
    then upload the screenshot and run Lighthouse side by side. Upload and
    Lighthouse failures are replaced by a placeholder URL and an inline
    error payload; anything failing before the screenshot exists fails the
    whole request.
    """

    def __init__(
        self,
        image_host: CloudinaryImageHost,
        lighthouse: LighthouseRunner,
        browser_factory: Optional[BrowserFactory] = None,
        navigation_timeout: Optional[int] = None,
        placeholder_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.image_host = image_host
        self.lighthouse = lighthouse
        self.browser_factory = browser_factory or BrowserService.build_driver
        self.navigation_timeout = navigation_timeout or settings.FULL_LOAD_TIMEOUT
        self.placeholder_url = placeholder_url or settings.SCREENSHOT_PLACEHOLDER_URL
        self.timeout = timeout or settings.ANALYSIS_TIMEOUT

    async def analyze(self, url: Optional[str]) -> AnalysisResult:
        if not url or not url.strip():
            raise MissingURLError()
        url = url.strip()

        logger.info(f"Starting analysis for URL: {url}")
        try:
            return await asyncio.wait_for(self._run(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Analysis of {url} exceeded {self.timeout} seconds")
            raise AnalyzerError(f"Analysis timed out after {self.timeout} seconds") from None

    async def _run(self, url: str) -> AnalysisResult:
        # The driver never outlives this call, even if the request is cancelled
        capture = await run_in_threadpool(self._capture, url)

        screenshot_url, scores = await asyncio.gather(
            self._upload_screenshot(capture.screenshot),
            self._run_audit(url),
        )

        if isinstance(scores, CategoryScores):
            uiux_score = composite_score(
                scores.performance.score,
                scores.accessibility.score,
                scores.best_practices.score,
            )
        else:
            uiux_score = UNAVAILABLE

        logger.info(f"Analysis finished for {url}: uiuxScore={uiux_score}")
        return AnalysisResult(
            title=capture.title or url,
            description=ANALYSIS_DESCRIPTION,
            screenshot=screenshot_url,
            uiuxScore=uiux_score,
            scores=scores,
        )

    def _capture(self, url: str) -> PageCapture:
        driver = None
        try:
            driver = self.browser_factory(NavigationPreset.FULL, self.navigation_timeout)
            BrowserService.load_page(driver, url)
            title = BrowserService.get_title(driver)
            screenshot = BrowserService.capture_screenshot(driver)
            return PageCapture(title=title, screenshot=screenshot)
        finally:
            if driver is not None:
                BrowserService.release(driver)
                logger.info(f"Browser released for {url}")

    async def _upload_screenshot(self, screenshot: str) -> str:
        try:
            return await self.image_host.upload(screenshot)
        except Exception as e:
            logger.warning(f"Screenshot upload failed, using placeholder: {e}")
            return self.placeholder_url

    async def _run_audit(self, url: str) -> Union[CategoryScores, AuditFailure]:
        try:
            report = await self.lighthouse.run(url)
        except Exception as e:
            logger.error(f"Lighthouse Error for {url}: {e}")
            return AuditFailure(error=LIGHTHOUSE_FAILED, message=str(e))
        return build_category_reports(report)
