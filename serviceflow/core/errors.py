"""Error taxonomy for catalog access and flow resolution."""


class FlowError(Exception):
    """Base class for errors reported by the flow orchestrator."""

    code = "flow_error"
    retryable = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(FlowError):
    """Catalog content or backend setup is wrong; retrying will not help."""

    code = "configuration_error"


class QuestionNotFoundError(ConfigurationError):
    """A rule points at a next question missing from the catalog."""

    code = "question_not_found"

    def __init__(self, question_id: str, rule_id: str | None = None) -> None:
        super().__init__(
            f"Rule {rule_id or '?'} references unknown question '{question_id}'"
        )
        self.question_id = question_id
        self.rule_id = rule_id


class GoalNotFoundError(ConfigurationError):
    """A rule points at goals missing from the catalog."""

    code = "goal_not_found"

    def __init__(self, goal_ids: list[str], rule_id: str | None = None) -> None:
        super().__init__(
            f"Rule {rule_id or '?'} references unknown goal(s): {', '.join(goal_ids)}"
        )
        self.goal_ids = goal_ids
        self.rule_id = rule_id


class CatalogMisconfiguredError(ConfigurationError):
    """The catalog backend is missing settings it needs to serve content."""

    code = "catalog_misconfigured"


class CatalogError(FlowError):
    """The catalog is unreachable or returned malformed data."""

    code = "catalog_unavailable"
    retryable = True


class InvalidHistoryError(FlowError):
    """The caller supplied an answer history the catalog cannot place."""

    code = "invalid_history"
