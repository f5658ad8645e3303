"""Construct the configured catalog backend."""

import logging

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.loader import CatalogLoader
from serviceflow.core.config import Settings

logger = logging.getLogger(__name__)


def create_catalog(settings: Settings, loader: CatalogLoader | None = None) -> Catalog:
    """Build the catalog selected by ``settings.catalog_backend``.

    Raises:
        ValueError: If the selected backend is missing required settings
    """
    backend = settings.catalog_backend

    if backend == "yaml":
        loader = loader or CatalogLoader()
        catalog = loader.load(settings.catalog_file)
        logger.info(
            f"Loaded catalog {settings.catalog_file} "
            f"(version={catalog.version}, hash={catalog.content_hash[:12]})"
        )
        return catalog

    if backend == "sql":
        from serviceflow.catalog.sql import SqlCatalog
        from serviceflow.db.session import AsyncSessionLocal

        return SqlCatalog(AsyncSessionLocal)

    if backend == "notion":
        from serviceflow.catalog.notion import NotionCatalog

        required = {
            "NOTION_SECRET": settings.notion_secret,
            "NOTION_DATABASE_GOALS_ID": settings.notion_database_goals_id,
            "NOTION_DATABASE_QUESTIONS_ID": settings.notion_database_questions_id,
            "NOTION_DATABASE_SERVICES_ID": settings.notion_database_services_id,
            "NOTION_DATABASE_RULES_ID": settings.notion_database_rules_id,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(f"Notion catalog requires: {', '.join(missing)}")

        return NotionCatalog(
            secret=settings.notion_secret,
            goals_database_id=settings.notion_database_goals_id,
            questions_database_id=settings.notion_database_questions_id,
            services_database_id=settings.notion_database_services_id,
            rules_database_id=settings.notion_database_rules_id,
            api_url=settings.notion_api_url,
            notion_version=settings.notion_version,
        )

    raise ValueError(f"Unknown catalog backend: {backend}")
