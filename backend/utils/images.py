# backend/utils/images.py
import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import Request, UploadFile

logger = logging.getLogger(__name__)


class ImageStore:
    """Product photos on local disk, published under a public base URL.

    Files are named ``<uuid4>.<ext>`` so concurrent uploads never collide.
    Removal is best-effort: failures are logged and reported as ``False``.
    """

    def __init__(self, upload_dir, public_base_url: str):
        self.upload_dir = Path(upload_dir)
        self.public_base_url = public_base_url.rstrip("/")

    def ensure_dir(self):
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def make_filename(original_name: Optional[str]) -> str:
        ext = Path(original_name or "").suffix.lstrip(".").lower() or "jpg"
        return f"{uuid.uuid4()}.{ext}"

    def url_for(self, filename: str) -> str:
        return f"{self.public_base_url}/{filename}"

    def path_for_url(self, url: Optional[str]) -> Optional[Path]:
        if not url:
            return None
        filename = str(url).rsplit("/", 1)[-1]
        if filename in ("", ".", ".."):
            return None
        return self.upload_dir / filename

    def save(self, upload: UploadFile) -> str:
        """Write the upload into the store and return the generated filename."""
        filename = self.make_filename(upload.filename)
        save_path = self.upload_dir / filename
        try:
            with open(save_path, "wb") as buffer:
                shutil.copyfileobj(upload.file, buffer)
        finally:
            upload.file.close()
        logger.info("Stored image %s (%s)", filename, upload.filename)
        return filename

    def remove(self, filename: str) -> bool:
        return self.remove_by_url(self.url_for(filename))

    def remove_by_url(self, url: Optional[str]) -> bool:
        path = self.path_for_url(url)
        if path is None:
            return False
        try:
            if path.exists():
                path.unlink()
                logger.info("Removed image %s", path.name)
                return True
        except OSError as e:
            logger.warning("Removing image %s failed: %s", url, e)
        return False


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store
