"""
Test configuration and fixtures for the UI/UX Analyzer API.

Cloudinary credentials are required settings, so dummy values are put in the
environment before anything from ``app`` is imported. No test launches a
browser, runs Lighthouse or talks to Cloudinary: those collaborators are
replaced with the fakes below.
"""

import copy
import os
from typing import Generator
from unittest.mock import MagicMock

os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "test-cloud")
os.environ.setdefault("CLOUDINARY_API_KEY", "test-key")
os.environ.setdefault("CLOUDINARY_API_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from app.platform.exceptions import ImageUploadError, LighthouseError


HOSTED_URL = "https://res.cloudinary.com/test-cloud/image/upload/uiuxAnalyzerImages/shot.png"
SCREENSHOT_B64 = "iVBORw0KGgoAAAANSUhEUg=="


def _audit(audit_id, score, title=None, description="Details."):
    audit = {"id": audit_id, "title": title or audit_id.replace("-", " ").title()}
    if description is not None:
        audit["description"] = description
    if score != "missing":
        audit["score"] = score
    return audit


SAMPLE_REPORT = {
    "categories": {
        "performance": {
            "score": 0.93,
            "auditRefs": [{"id": "first-contentful-paint"}, {"id": "uses-optimized-images"}],
        },
        "accessibility": {
            "score": 0.81,
            "auditRefs": [{"id": "color-contrast"}, {"id": "document-title"}],
        },
        "best-practices": {
            "score": 1.0,
            "auditRefs": [{"id": "is-on-https"}],
        },
    },
    "audits": {
        "first-contentful-paint": _audit("first-contentful-paint", 1),
        "uses-optimized-images": _audit("uses-optimized-images", 0.45, "Efficiently encode images"),
        "color-contrast": _audit("color-contrast", 0, "Background and foreground colors do not have a sufficient contrast ratio."),
        "document-title": _audit("document-title", 1),
        "is-on-https": _audit("is-on-https", 1),
    },
}


@pytest.fixture
def lighthouse_report():
    return copy.deepcopy(SAMPLE_REPORT)


@pytest.fixture
def make_audit():
    return _audit


class FakeImageHost:
    def __init__(self, url=HOSTED_URL, error=None):
        self.url = url
        self.error = error
        self.uploads = []

    async def upload(self, base64_png):
        self.uploads.append(base64_png)
        if self.error:
            raise self.error
        return self.url


class FakeLighthouse:
    def __init__(self, report=None, error=None):
        self.report = report
        self.error = error
        self.urls = []

    async def run(self, url):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.report


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def failing_image_host():
    return FakeImageHost(error=ImageUploadError("Invalid Signature"))


@pytest.fixture
def fake_lighthouse(lighthouse_report):
    return FakeLighthouse(report=lighthouse_report)


@pytest.fixture
def failing_lighthouse():
    return FakeLighthouse(error=LighthouseError("Chrome prevented page load"))


@pytest.fixture
def mock_driver():
    driver = MagicMock()
    driver.title = "Example Domain"
    driver.execute_script.side_effect = [1366, 2400]
    driver.get_screenshot_as_base64.return_value = SCREENSHOT_B64
    return driver


@pytest.fixture
def browser_factory(mock_driver):
    """Stands in for BrowserService.build_driver and records each launch."""
    factory = MagicMock(return_value=mock_driver)
    return factory


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()


@pytest.fixture
def hosted_url():
    return HOSTED_URL


@pytest.fixture
def screenshot_b64():
    return SCREENSHOT_B64


@pytest.fixture
def make_lighthouse():
    return FakeLighthouse
