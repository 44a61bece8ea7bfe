"""Transform job files: loading, selection and execution."""

from .loader import load_jobs
from .models import GeneratorConfig, JobConfig, JobFile, JobOptions, JobResult
from .runner import exit_code, run_jobs, select_jobs

__all__ = [
    "GeneratorConfig",
    "JobConfig",
    "JobFile",
    "JobOptions",
    "JobResult",
    "exit_code",
    "load_jobs",
    "run_jobs",
    "select_jobs",
]
