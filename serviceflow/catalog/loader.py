"""YAML catalog loader with integrity hashing."""

import hashlib
from pathlib import Path
from typing import Any

import yaml

from serviceflow.catalog.entities import Goal, Question, QuestionOption, QuestionType, Service
from serviceflow.catalog.static import StaticCatalog
from serviceflow.core.errors import CatalogError
from serviceflow.rules.models import RoutingRule

# Default catalogs directory
CATALOGS_DIR = Path(__file__).parent.parent.parent / "catalogs"


def compute_catalog_hash(content: str) -> str:
    """Compute SHA256 hash of catalog file content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def load_catalog_file(
    filename: str,
    catalogs_dir: Path | None = None,
) -> tuple[dict[str, Any], str]:
    """Load a catalog YAML file and compute its hash.

    Args:
        filename: Name of the catalog file (e.g., "default.yaml")
        catalogs_dir: Directory containing catalogs (defaults to /catalogs)

    Returns:
        Tuple of (parsed catalog dict, SHA256 hash)

    Raises:
        FileNotFoundError: If catalog file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    if catalogs_dir is None:
        catalogs_dir = CATALOGS_DIR

    filepath = catalogs_dir / filename

    if not filepath.exists():
        raise FileNotFoundError(f"Catalog not found: {filepath}")

    content = filepath.read_text(encoding="utf-8")
    return yaml.safe_load(content) or {}, compute_catalog_hash(content)


def _get(record: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return default


def _require_id(record: dict[str, Any], kind: str) -> str:
    record_id = record.get("id")
    if record_id is None or record_id == "":
        raise CatalogError(f"{kind} record without id: {record!r}")
    return str(record_id)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def goal_from_dict(record: dict[str, Any]) -> Goal:
    return Goal(
        id=_require_id(record, "Goal"),
        title=str(_get(record, "title", default="No title")),
        description=_optional_str(record.get("description")),
        order=int(_get(record, "order", default=0)),
    )


def question_from_dict(record: dict[str, Any]) -> Question:
    options = []
    for option in _get(record, "options", default=[]):
        # Bare strings are both value and label
        if isinstance(option, dict):
            value = str(option.get("value", option.get("label", "")))
            options.append(QuestionOption(value=value, label=str(option.get("label", value))))
        else:
            options.append(QuestionOption(value=str(option), label=str(option)))

    try:
        question_type = QuestionType(_get(record, "type", default="single_choice"))
    except ValueError:
        question_type = QuestionType.SINGLE_CHOICE

    return Question(
        id=_require_id(record, "Question"),
        text=str(_get(record, "text", default="No title")),
        type=question_type,
        options=tuple(options),
        description=str(_get(record, "description", default="")),
        goal_id=_optional_str(_get(record, "goalId", "goal_id")),
        order=int(_get(record, "order", default=0)),
    )


def service_from_dict(record: dict[str, Any]) -> Service:
    return Service(
        id=_require_id(record, "Service"),
        name=str(_get(record, "name", default="No title")),
        description=_optional_str(record.get("description")),
        docs_url=_optional_str(_get(record, "docsUrl", "docs_url")),
        tags=tuple(str(t) for t in _get(record, "tags", default=[])),
        goal_id=_optional_str(_get(record, "goalId", "goal_id")),
    )


def rule_from_dict(record: dict[str, Any]) -> RoutingRule:
    _require_id(record, "Routing rule")
    try:
        return RoutingRule.from_dict(record)
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed routing rule {record.get('id')}: {exc}") from exc


def build_catalog(data: dict[str, Any], content_hash: str = "") -> StaticCatalog:
    """Build an in-memory catalog from a parsed catalog document.

    Raises:
        CatalogError: If a record is malformed
    """
    try:
        return StaticCatalog(
            goals=[goal_from_dict(r) for r in data.get("goals") or []],
            questions=[question_from_dict(r) for r in data.get("questions") or []],
            services=[service_from_dict(r) for r in data.get("services") or []],
            rules=[rule_from_dict(r) for r in data.get("rules") or []],
            version=str(data.get("version", "unknown")),
            content_hash=content_hash,
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed catalog document: {exc}") from exc


class CatalogLoader:
    """Stateful catalog loader with caching."""

    def __init__(self, catalogs_dir: Path | None = None) -> None:
        self.catalogs_dir = catalogs_dir or CATALOGS_DIR
        self._cache: dict[str, StaticCatalog] = {}

    def load(self, filename: str, use_cache: bool = True) -> StaticCatalog:
        """Load a catalog file into a StaticCatalog.

        Args:
            filename: Catalog filename
            use_cache: Whether to use cached version if available

        Returns:
            Catalog snapshot of the file
        """
        if use_cache and filename in self._cache:
            return self._cache[filename]

        data, content_hash = load_catalog_file(filename, self.catalogs_dir)
        catalog = build_catalog(data, content_hash)
        self._cache[filename] = catalog

        return catalog

    def clear_cache(self) -> None:
        """Clear the catalog cache."""
        self._cache.clear()

    def list_catalogs(self) -> list[str]:
        """List available catalog files."""
        return sorted(f.name for f in self.catalogs_dir.glob("*.yaml"))
