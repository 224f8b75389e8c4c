"""Shared test configuration: points the app at a throwaway SQLite database."""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")

# Must be set before storefront.config is first imported
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/storefront.db"
os.environ["CHANGE_CAPTURE_ENABLED"] = "false"
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["CLOUDINARY_API_KEY"] = ""
os.environ["CLOUDINARY_API_SECRET"] = ""
