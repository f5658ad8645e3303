"""Goals shown on the selection page when the catalog is empty or unreachable."""

from serviceflow.catalog.entities import Goal

FALLBACK_GOALS = [
    Goal(
        id="UC001",
        title="Build a CSV conversion tool",
        description="Tooling that reshapes and transforms existing CSV files",
        order=1,
    ),
    Goal(
        id="UC002",
        title="Replace an existing system with ECS",
        description="Migrate from on-premises or EC2 to ECS on Fargate",
        order=2,
    ),
]
