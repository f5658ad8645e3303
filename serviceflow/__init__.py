"""ServiceFlow: guided questionnaire that routes users to recommended services."""

__version__ = "0.1.0"
