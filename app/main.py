import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.features.analysis.routes.analysis import router as analysis_router
from app.features.health.routes.health import router as health_router
from app.features.scraping.routes.scraping_routes import router as scraping_router
from app.platform.config import settings
from app.platform.exceptions import add_exception_handlers

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Screenshot, Lighthouse findings and a composite UI/UX score for any URL",
    version="1.0.0",
    debug=settings.DEBUG,
)


# Root endpoint for basic info
@app.get("/", tags=["Info"])
def root():
    return {
        "app_name": settings.APP_NAME,
        "description": "UI/UX quality reports: screenshot, Lighthouse findings and a composite score.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "endpoints": ["/analyze", "/scrape", "/health"],
    }


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_exception_handlers(app)

app.include_router(health_router)
app.include_router(analysis_router)
app.include_router(scraping_router)
