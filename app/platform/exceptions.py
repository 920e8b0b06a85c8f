from fastapi import Request, status

from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger("exceptions")

MISSING_URL_MESSAGE = "URL is required"
ANALYSIS_FAILED_MESSAGE = "Failed to analyze website"


class AnalyzerError(Exception):
    """Base class for every error raised by the analyzer services."""


class MissingURLError(AnalyzerError):
    def __init__(self, message: str = MISSING_URL_MESSAGE):
        super().__init__(message)


class BrowserLaunchError(AnalyzerError):
    pass


class CaptureError(AnalyzerError):
    pass


class LighthouseError(AnalyzerError):
    pass


class ImageUploadError(AnalyzerError):
    pass


def add_exception_handlers(app):
    @app.exception_handler(MissingURLError)
    async def missing_url_handler(request: Request, exc: MissingURLError):
        return error_response(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
        return error_response(ANALYSIS_FAILED_MESSAGE, details=str(exc))
