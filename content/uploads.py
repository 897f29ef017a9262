"""
Image upload and cleanup for entity images.

Every entity kind writes into its own bucket, a named entry of the
``STORAGES`` setting. Uploaded objects are stored as
``<prefix>/<owner id or "temp">_<epoch millis>.<ext>`` and referenced from
the entity record by their public URL.
"""
import logging
import posixpath
import time
from urllib.parse import unquote, urlparse

from django.conf import settings
from django.core.files.storage import storages

from authentication.exceptions import UploadError

logger = logging.getLogger(__name__)


class ImageStore:
    def __init__(self, bucket, prefix, max_size=None, storage=None):
        self.bucket = bucket
        self.prefix = prefix
        self.max_size = max_size
        self._storage = storage

    @property
    def storage(self):
        # resolved per call so a reconfigured STORAGES takes effect
        if self._storage is not None:
            return self._storage
        return storages[self.bucket]

    def validate(self, file):
        content_type = getattr(file, 'content_type', None) or ''
        if not content_type.startswith('image/'):
            raise UploadError('Please select an image file (JPG, PNG, etc.).')
        if self.max_size is not None and file.size > self.max_size:
            limit = self.max_size // (1024 * 1024)
            raise UploadError(f'The image must be smaller than {limit} MB.')

    def build_path(self, filename, owner_id=None):
        ext = posixpath.splitext(filename or '')[1]
        stamp = int(time.time() * 1000)
        return f"{self.prefix}/{owner_id or 'temp'}_{stamp}{ext}"

    def upload(self, file, owner_id=None):
        """Store ``file`` and return its public URL; raises UploadError"""
        self.validate(file)
        path = self.build_path(file.name, owner_id)
        try:
            saved = self.storage.save(path, file)
            url = self.storage.url(saved)
        except Exception as e:
            logger.error(f"Upload to {self.bucket} failed: {e}")
            raise UploadError(f'Upload failed: {e}') from e
        logger.info(f"Uploaded {saved} to {self.bucket}")
        return url

    def delete(self, url):
        """Remove the object behind a public URL; failures are logged and reported as False"""
        if not url:
            return False
        filename = unquote(urlparse(url).path.rstrip('/').rsplit('/', 1)[-1])
        if not filename:
            return False
        try:
            self.storage.delete(f"{self.prefix}/{filename}")
        except Exception as e:
            logger.warning(f"Could not delete {filename} from {self.bucket}: {e}")
            return False
        return True


def category_images():
    return ImageStore('category-images', 'categories')


def event_images():
    return ImageStore('event-images', 'events', max_size=settings.IMAGE_MAX_UPLOAD_SIZE)


def home_images():
    return ImageStore('home-images', 'home-sections', max_size=settings.IMAGE_MAX_UPLOAD_SIZE)
