"""jiracli - a terminal client for JIRA."""

__version__ = "0.1.0"
