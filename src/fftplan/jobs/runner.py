"""Executor for transform job files."""
from __future__ import annotations

import fnmatch
import logging
import time
from typing import List, Optional, Sequence

import numpy as np

from fftplan.core import Tolerance, compare_outputs, roundtrip_scale
from fftplan.core.cache import PlanCache
from fftplan.reporting import ReportManager, Reporter

from .models import GeneratorConfig, JobConfig, JobFile, JobOptions, JobResult

logger = logging.getLogger(__name__)


def select_jobs(job_file: JobFile, options: JobOptions) -> List[JobConfig]:
    matches: List[JobConfig] = []
    for job in job_file.jobs:
        if options.names and not any(fnmatch.fnmatchcase(job.name, pattern) for pattern in options.names):
            continue
        if options.tags and not set(options.tags) & set(job.tags):
            continue
        if options.skip_tags and set(options.skip_tags) & set(job.tags):
            continue
        matches.append(job)
    return matches


def run_jobs(
    job_file: JobFile,
    options: Optional[JobOptions] = None,
    reporters: Sequence[Reporter] = (),
) -> List[JobResult]:
    """Execute the selected jobs, reusing one plan per distinct configuration."""

    options = options or JobOptions()
    selected = select_jobs(job_file, options)
    manager = ReportManager(reporters)
    manager.start(job_file, len(selected))
    results: List[JobResult] = []
    with PlanCache(provider=options.provider) as cache:
        for index, job in enumerate(selected, start=1):
            result = _execute_job(job, cache, options.provider)
            results.append(result)
            manager.handle_result(result, index, len(selected))
        logger.debug("Job run used %d plan(s): %d hit(s), %d miss(es)", len(cache), cache.hits, cache.misses)
    manager.complete(results)
    return results


def exit_code(results: Sequence[JobResult]) -> int:
    return 0 if results and all(result.passed for result in results) else 1


def _execute_job(job: JobConfig, cache: PlanCache, provider_override: Optional[str]) -> JobResult:
    start = time.perf_counter()
    provider = provider_override or job.provider
    try:
        plan = cache.get(job.size, job.kind, job.effort, provider=provider)
        data = job.input if job.input is not None else generate_input(job.generator, job)
        output = None
        for _ in range(job.repeat):
            output = plan.execute(data, inverse=job.inverse)
        calls = job.repeat
        comparison = None
        if job.expected is not None:
            comparison = compare_outputs(output, job.expected, job.tolerance)
        elif job.roundtrip:
            restored = plan.execute(output, inverse=not job.inverse)
            calls += 1
            expected = np.asarray(data) * roundtrip_scale(job.kind, job.size)
            comparison = compare_outputs(restored, expected, _scaled(job.tolerance, job.size))
        status = "passed" if comparison is None or comparison.passed else "failed"
        return JobResult(
            job=job,
            status=status,
            duration_s=time.perf_counter() - start,
            calls=calls,
            provider=plan.provider,
            comparison=comparison,
        )
    except Exception as exc:
        logger.debug("Job %s raised", job.name, exc_info=True)
        return JobResult(
            job=job,
            status="error",
            duration_s=time.perf_counter() - start,
            provider=provider,
            error=str(exc),
        )


def _scaled(tolerance: Tolerance, size: int) -> Tolerance:
    # Round-trip error grows with the transform length.
    return Tolerance(absolute=tolerance.absolute * size, relative=tolerance.relative)


def generate_input(config: Optional[GeneratorConfig], job: JobConfig) -> np.ndarray:
    if config is None:
        raise ValueError(f"Job '{job.name}' has neither input nor generator")
    rng = np.random.default_rng(config.seed)
    shape = (job.size,)
    name = config.name
    if name == "zeros":
        return np.zeros(shape)
    if name == "ones":
        return np.ones(shape)
    if name == "impulse":
        data = np.zeros(shape)
        data[int(config.params.get("index", 0)) % job.size] = 1.0
        return data
    if name == "uniform":
        low = float(config.params.get("low", -1.0))
        high = float(config.params.get("high", 1.0))
        data = rng.uniform(low, high, size=shape)
    elif name == "random":
        data = rng.standard_normal(size=shape)
    else:
        raise ValueError(
            f"Unknown generator '{name}'. Supported: random, uniform, ones, zeros, impulse."
        )
    if job.kind.is_complex and config.params.get("complex", False):
        data = data + 1j * rng.standard_normal(size=shape)
    return data
