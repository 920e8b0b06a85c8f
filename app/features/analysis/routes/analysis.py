from typing import Optional

from fastapi import APIRouter, Depends, status

from app.features.analysis.dependencies.orchestrator import get_orchestrator
from app.features.analysis.schemas.analysis import AnalyzeIn
from app.features.analysis.services.orchestrator import AnalysisOrchestrator
from app.platform.exceptions import ANALYSIS_FAILED_MESSAGE, MissingURLError
from app.platform.logger import get_logger
from app.platform.response import error_response, report_response

logger = get_logger("analysis_routes")
router = APIRouter(tags=["Analysis"])


@router.post("/analyze")
async def analyze_website(
    analyze_in: Optional[AnalyzeIn] = None,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    url = analyze_in.url if analyze_in else None

    try:
        result = await orchestrator.analyze(url)
    except MissingURLError as e:
        logger.warning("Analyze request without a URL")
        return error_response(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(f"Failed to analyze {url}: {e}", exc_info=True)
        return error_response(ANALYSIS_FAILED_MESSAGE, details=str(e))

    return report_response(result.to_response())
