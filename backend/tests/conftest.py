"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real backend or pick up a developer's secrets
os.environ.setdefault("STORAGE_BACKEND", "airtable")
os.environ.setdefault("AIRTABLE_API_KEY", "key-test-fake")
os.environ.setdefault("AIRTABLE_BASE_ID", "appTestBase")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("SAVE_TOKEN", None)
os.environ.pop("NETLIFY_SAVE_TOKEN", None)
