"""Pipeline driver and step tracking."""

from realmgen.pipeline.driver import PipelineDriver, PipelineResult
from realmgen.pipeline.exceptions import PipelineError, RestartLimitError, RetriesExhaustedError
from realmgen.pipeline.tracker import Step, StepTracker

__all__ = [
    "PipelineDriver",
    "PipelineError",
    "PipelineResult",
    "RestartLimitError",
    "RetriesExhaustedError",
    "Step",
    "StepTracker",
]
