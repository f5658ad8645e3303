"""Catalog collaborators: read-only stores of goals, questions, services and rules."""

from serviceflow.catalog.base import Catalog
from serviceflow.catalog.entities import Goal, Question, QuestionOption, QuestionType, Service
from serviceflow.catalog.loader import CatalogLoader, build_catalog, load_catalog_file
from serviceflow.catalog.static import StaticCatalog

__all__ = [
    "Catalog",
    "StaticCatalog",
    "CatalogLoader",
    "build_catalog",
    "load_catalog_file",
    "Goal",
    "Question",
    "QuestionOption",
    "QuestionType",
    "Service",
]
