"""Configuration for the workflow core."""

from taskflow.config.workflow_config import (
    DEFAULT_WORKFLOW_CONFIG,
    MAX_HISTORY_PAGE_LIMIT,
    TEST_WORKFLOW_CONFIG,
    WorkflowConfig,
    get_environment,
)

__all__ = [
    "DEFAULT_WORKFLOW_CONFIG",
    "MAX_HISTORY_PAGE_LIMIT",
    "TEST_WORKFLOW_CONFIG",
    "WorkflowConfig",
    "get_environment",
]
