from typing import Optional

import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from app.platform.config import Settings, settings
from app.platform.exceptions import ImageUploadError
from app.platform.logger import get_logger

logger = get_logger("image_host")


class CloudinaryImageHost:
    """
    Cloudinary client bound to one set of credentials.

    Credentials go with every upload call instead of the SDK's global
    ``cloudinary.config``, so two hosts with different accounts can coexist.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, folder: str):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "CloudinaryImageHost":
        config = config or settings
        return cls(
            cloud_name=config.CLOUDINARY_CLOUD_NAME,
            api_key=config.CLOUDINARY_API_KEY,
            api_secret=config.CLOUDINARY_API_SECRET,
            folder=config.UPLOAD_FOLDER,
        )

    def _upload(self, base64_png: str) -> str:
        result = cloudinary.uploader.upload(
            f"data:image/png;base64,{base64_png}",
            folder=self.folder,
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
        )
        return result["secure_url"]

    async def upload(self, base64_png: str) -> str:
        """
        Upload a base64 PNG and return its public https URL.

        Raises:
            ImageUploadError: on any SDK or network failure
        """
        try:
            url = await run_in_threadpool(self._upload, base64_png)
        except Exception as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise ImageUploadError(str(e)) from e

        logger.info(f"Screenshot uploaded to {url}")
        return url
