"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.domain import storefront

# Initialized at module level so uvicorn workers share the registry.
# PROTEAN_ENV selects the config overlay from storefront/domain.toml.
storefront.init()

from storefront.api.application import create_app  # noqa: E402

app = create_app()
