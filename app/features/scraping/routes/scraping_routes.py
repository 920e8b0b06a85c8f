from typing import Optional

from fastapi import APIRouter, status
from starlette.concurrency import run_in_threadpool

from app.features.scraping.schemas.scraping_schema import ScrapeFailure, ScrapeRequest
from app.features.scraping.services.scraper_service import SCRAPE_FAILED, ScraperService
from app.platform.exceptions import MISSING_URL_MESSAGE
from app.platform.logger import get_logger
from app.platform.response import error_response, report_response

logger = get_logger("scraping_routes")
router = APIRouter(tags=["Scraping"])


@router.post("/scrape")
async def scrape_website(request: Optional[ScrapeRequest] = None):
    url = request.url.strip() if request and request.url else ""
    if not url:
        return error_response(MISSING_URL_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)

    service = ScraperService()
    try:
        result = await run_in_threadpool(service.scrape_website, url)
    except Exception as e:
        logger.error(f"Scrape of {url} failed: {e}", exc_info=True)
        return error_response(SCRAPE_FAILED, details=str(e))

    if isinstance(result, ScrapeFailure):
        return report_response(result.model_dump(), status_code=status.HTTP_502_BAD_GATEWAY)
    return report_response(result.model_dump())
