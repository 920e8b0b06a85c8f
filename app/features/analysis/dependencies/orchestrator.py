from app.features.analysis.services.image_host import CloudinaryImageHost
from app.features.analysis.services.lighthouse import LighthouseRunner
from app.features.analysis.services.orchestrator import AnalysisOrchestrator


def get_orchestrator() -> AnalysisOrchestrator:
    """
    Fresh orchestrator per request, wired from settings.

    Tests swap this out through app.dependency_overrides.
    """
    return AnalysisOrchestrator(
        image_host=CloudinaryImageHost.from_settings(),
        lighthouse=LighthouseRunner(),
    )
