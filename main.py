import uvicorn

from app.platform.config import settings


def run() -> None:
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
