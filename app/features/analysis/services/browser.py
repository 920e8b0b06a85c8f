from enum import Enum
from typing import Optional

from selenium import webdriver
from selenium.common.exceptions import NoSuchElementException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from webdriver_manager.chrome import ChromeDriverManager

from app.platform.config import settings
from app.platform.exceptions import BrowserLaunchError, CaptureError
from app.platform.logger import get_logger

logger = get_logger("browser_service")

_CHROMEDRIVER_PATH = None

# Chrome refuses screenshots taller than this
MAX_SCREENSHOT_HEIGHT = 16384


class NavigationPreset(str, Enum):
    """How long navigation waits before the page counts as loaded."""

    FAST = "fast"  # DOM parsed, scripts/images may still be loading
    FULL = "full"  # load event fired

    @property
    def page_load_strategy(self) -> str:
        return "eager" if self is NavigationPreset.FAST else "normal"


def _chromedriver_path() -> str:
    global _CHROMEDRIVER_PATH
    if settings.CHROMEDRIVER_PATH:
        return settings.CHROMEDRIVER_PATH
    if _CHROMEDRIVER_PATH is None:
        _CHROMEDRIVER_PATH = ChromeDriverManager().install()
    return _CHROMEDRIVER_PATH


class BrowserService:
    @staticmethod
    def build_options(preset: NavigationPreset) -> Options:
        chrome_options = Options()
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-setuid-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_argument("--window-size=1366,768")
        chrome_options.page_load_strategy = preset.page_load_strategy
        return chrome_options

    @staticmethod
    def build_driver(preset: NavigationPreset, timeout: int) -> webdriver.Chrome:
        """
        Launch a Chrome instance owned by a single caller.

        Caller is responsible for BrowserService.release(driver).

        Raises:
            BrowserLaunchError: if Chrome or chromedriver cannot be started
        """
        try:
            service = Service(executable_path=_chromedriver_path())
            driver = webdriver.Chrome(service=service, options=BrowserService.build_options(preset))
        except Exception as e:
            logger.error(f"Failed to launch browser: {e}")
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

        driver.set_page_load_timeout(timeout)
        return driver

    @staticmethod
    def load_page(driver: webdriver.Chrome, url: str) -> None:
        logger.info(f"Navigating to {url}")
        driver.get(url)

    @staticmethod
    def get_title(driver: webdriver.Chrome) -> str:
        return driver.title or ""

    @staticmethod
    def get_meta_description(driver: webdriver.Chrome) -> Optional[str]:
        try:
            element = driver.find_element(By.CSS_SELECTOR, 'meta[name="description"]')
        except NoSuchElementException:
            return None
        return element.get_attribute("content")

    @staticmethod
    def capture_screenshot(driver: webdriver.Chrome, full_page: bool = True) -> str:
        """Return a base64-encoded PNG of the page."""
        try:
            if full_page:
                width = driver.execute_script("return document.documentElement.scrollWidth")
                height = driver.execute_script("return document.documentElement.scrollHeight")
                if width and height:
                    driver.set_window_size(int(width), min(int(height), MAX_SCREENSHOT_HEIGHT))
            return driver.get_screenshot_as_base64()
        except WebDriverException as e:
            raise CaptureError(f"Screenshot could not be captured: {e.msg or e}") from e

    @staticmethod
    def release(driver: Optional[webdriver.Chrome]) -> None:
        if driver is None:
            return
        try:
            driver.quit()
        except WebDriverException as e:
            logger.warning(f"Error while closing browser: {e}")
