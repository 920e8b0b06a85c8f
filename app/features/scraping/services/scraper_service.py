from typing import Optional, Union

from app.features.analysis.services.browser import BrowserService, NavigationPreset
from app.features.scraping.schemas.scraping_schema import ScrapeFailure, ScrapeResponse
from app.platform.config import settings
from app.platform.exceptions import CaptureError
from app.platform.logger import get_logger

logger = get_logger("scraper_service")

TITLE_NOT_FOUND = "Title not found"
DESCRIPTION_MISSING = "Meta description missing"
SCREENSHOT_FAILED = "Screenshot could not be captured"
SCRAPE_FAILED = "Failed to scrape website"


class ScraperService:
    """Quick title/description/screenshot grab. Does not wait for a full page load."""

    def __init__(self, timeout: Optional[int] = None, browser_factory=None):
        self.timeout = timeout or settings.FAST_LOAD_TIMEOUT
        self.browser_factory = browser_factory or BrowserService.build_driver

    def scrape_website(self, url: str) -> Union[ScrapeResponse, ScrapeFailure]:
        driver = self.browser_factory(NavigationPreset.FAST, self.timeout)
        try:
            BrowserService.load_page(driver, url)

            title = self._safe_title(driver)
            description = self._safe_description(driver)
            try:
                screenshot = BrowserService.capture_screenshot(driver, full_page=False)
            except CaptureError as e:
                logger.warning(f"{url}: {e}")
                screenshot = SCREENSHOT_FAILED

            return ScrapeResponse(title=title, description=description, screenshot=screenshot)
        except Exception as e:
            logger.error(f"Error scraping {url}: {str(e)}")
            return ScrapeFailure(error=SCRAPE_FAILED, details=str(e))
        finally:
            BrowserService.release(driver)

    @staticmethod
    def _safe_title(driver) -> str:
        try:
            return BrowserService.get_title(driver) or TITLE_NOT_FOUND
        except Exception as e:
            logger.warning(f"Could not read page title: {e}")
            return TITLE_NOT_FOUND

    @staticmethod
    def _safe_description(driver) -> str:
        try:
            return BrowserService.get_meta_description(driver) or DESCRIPTION_MISSING
        except Exception as e:
            logger.warning(f"Could not read meta description: {e}")
            return DESCRIPTION_MISSING
