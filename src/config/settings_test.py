"""Settings for the pytest-django suite.

Provides the defaults that production settings refuse to guess
(``SECRET_KEY``) and swaps Redis and on-disk media for local stand-ins.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "order-desk-test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "order-desk-tests",
    }
}

MEDIA_ROOT = tempfile.mkdtemp(prefix="order-desk-media-")

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"
    },
}
