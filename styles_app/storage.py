"""
Object storage for style images.

`ImageStorage` is the only place that talks to the storage backend. It accepts the image payloads
the API receives (a base64 data URI, a bare base64 string or an http(s) URL), scales the image
down to the configured width and stores it under a generated name. The stored name is the
image's identifier; it is needed again to delete the image.

The backend is a Django storage: the local filesystem under MEDIA_ROOT by default, or S3 through
django-storages when `USE_S3` is set.
"""
import base64
import binascii
import io
import logging
import uuid
from dataclasses import dataclass

import requests
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# File extensions for the formats Pillow reports.
EXTENSIONS = {
    'JPEG': 'jpg',
    'MPO': 'jpg',
    'PNG': 'png',
    'GIF': 'gif',
    'WEBP': 'webp',
}


class ImageUploadError(ValueError):
    """The payload is not an image we can read."""


class ImageStorageError(Exception):
    """Fetching, storing or deleting an image failed."""


@dataclass(frozen=True)
class StoredImage:
    public_id: str
    url: str


class ImageStorage:
    """
    Uploads and deletes style images.

    Args:
        storage: The Django storage backend. Defaults to `default_storage`.
        folder (str): Folder the images are stored in.
        width (int): Images wider than this are scaled down to it, keeping the aspect ratio.
            Narrower images are stored as they are.
        fetch_timeout (float): Timeout in seconds when the payload is a URL.
    """

    def __init__(self, storage=None, folder='hijab-styles', width=1500, fetch_timeout=10):
        self.storage = storage if storage is not None else default_storage
        self.folder = folder
        self.width = width
        self.fetch_timeout = fetch_timeout

    @classmethod
    def from_settings(cls):
        return cls(
            folder=settings.IMAGE_UPLOAD_FOLDER,
            width=settings.IMAGE_UPLOAD_WIDTH,
            fetch_timeout=settings.IMAGE_FETCH_TIMEOUT,
        )

    def upload(self, payload, folder=None, width=None):
        """
        Stores the image in `payload` and returns its identifier and URL.

        Raises:
            ImageUploadError: The payload cannot be decoded or is not an image.
            ImageStorageError: The URL could not be fetched or the backend failed to save.
        """
        raw = self._read_payload(payload)
        content, extension = self._scale(raw, width or self.width)

        name = f"{folder or self.folder}/{uuid.uuid4().hex}.{extension}"
        try:
            public_id = self.storage.save(name, ContentFile(content))
            url = self.storage.url(public_id)
        except Exception as exc:
            raise ImageStorageError(f"Could not store image {name}") from exc

        logger.info("Stored image %s", public_id)
        return StoredImage(public_id=public_id, url=url)

    def destroy(self, public_id):
        """Deletes a stored image. An empty identifier is a no-op."""
        if not public_id:
            return
        try:
            self.storage.delete(public_id)
        except Exception as exc:
            raise ImageStorageError(f"Could not delete image {public_id}") from exc
        logger.info("Deleted image %s", public_id)

    def _read_payload(self, payload):
        if not isinstance(payload, str) or not payload.strip():
            raise ImageUploadError("No image was provided.")
        payload = payload.strip()

        if payload.startswith(('http://', 'https://')):
            return self._fetch(payload)

        if payload.startswith('data:'):
            header, _, payload = payload.partition(',')
            if ';base64' not in header:
                raise ImageUploadError("Only base64 encoded data URIs are supported.")

        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImageUploadError("The image is not valid base64.") from exc

    def _fetch(self, url):
        try:
            response = requests.get(url, timeout=self.fetch_timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ImageStorageError(f"Could not fetch image from {url}") from exc
        return response.content

    def _scale(self, raw, width):
        """Returns the (possibly scaled) image bytes and the file extension for its format."""
        try:
            image = Image.open(io.BytesIO(raw))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageUploadError("The file is not a supported image.") from exc

        image_format = image.format or 'PNG'
        if image_format == 'MPO':
            image_format = 'JPEG'

        if image.width > width:
            height = max(1, round(image.height * width / image.width))
            image = image.resize((width, height), Image.Resampling.LANCZOS)

        if image_format == 'JPEG' and image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=image_format)
        except (KeyError, ValueError, OSError) as exc:
            raise ImageUploadError(f"Images in {image_format} format cannot be stored.") from exc
        return buffer.getvalue(), EXTENSIONS.get(image_format, image_format.lower())
