"""Probe engine running registered probes over plugins."""

import asyncio
import heapq
import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path

from pluginhealth.scoring.github import GitHubClient
from pluginhealth.scoring.models.plugin import Plugin
from pluginhealth.scoring.models.probe_result import ProbeResult
from pluginhealth.scoring.models.update_center import UpdateCenter
from pluginhealth.scoring.probes.base import Probe
from pluginhealth.scoring.probes.context import ProbeContext

logger = logging.getLogger(__name__)


class ProbeConfigurationError(ValueError):
    """Raised when the registered probe set cannot be executed."""


def _utc_now() -> datetime:
    return datetime.now(UTC)


def order_probes(probes: Sequence[Probe]) -> list[Probe]:
    """Sort probes so that every probe comes after its requirements.

    Ties are broken by probe key for reproducible ordering.

    Raises:
        ProbeConfigurationError: On duplicate keys, unknown requirements or cycles

    """
    by_key: dict[str, Probe] = {}
    for probe in probes:
        key = probe.key()
        if key in by_key:
            raise ProbeConfigurationError(f"Duplicate probe key: {key}")
        by_key[key] = probe

    in_degree: dict[str, int] = {key: 0 for key in by_key}
    dependents: dict[str, list[str]] = {key: [] for key in by_key}
    for key, probe in by_key.items():
        for requirement in probe.probe_result_requirements():
            if requirement not in by_key:
                raise ProbeConfigurationError(
                    f"Probe {key} requires unregistered probe {requirement}"
                )
            dependents[requirement].append(key)
            in_degree[key] += 1

    ready = [key for key, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)
    ordered: list[Probe] = []
    while ready:
        key = heapq.heappop(ready)
        ordered.append(by_key[key])
        for dependent in dependents[key]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, dependent)

    if len(ordered) != len(by_key):
        cycle = sorted(key for key, degree in in_degree.items() if degree > 0)
        raise ProbeConfigurationError(
            f"Cycle in probe requirements between: {', '.join(cycle)}"
        )

    return ordered


def should_run(probe: Probe, plugin: Plugin, context: ProbeContext) -> bool:
    """Decide whether a probe runs on a plugin for this context."""
    key = probe.key()

    if key in plugin.excluded_probes:
        logger.debug(f"Skipping {key} on {plugin.name}: excluded")
        return False

    missing = sorted(
        requirement
        for requirement in probe.probe_result_requirements()
        if not plugin.has_succeeded(requirement)
    )
    if missing:
        logger.debug(
            f"Skipping {key} on {plugin.name}: requirements not met {missing}"
        )
        return False

    if probe.is_source_code_related() and not context.has_working_tree():
        logger.debug(f"Skipping {key} on {plugin.name}: no working tree")
        return False

    if probe.requires_release():
        previous = plugin.result_for(key)
        if previous is not None and (
            plugin.release_timestamp is None
            or plugin.release_timestamp <= previous.timestamp
        ):
            logger.debug(f"Skipping {key} on {plugin.name}: no release since last run")
            return False

    return True


class ProbeEngine:
    """Runs a fixed set of probes over plugins."""

    def __init__(
        self,
        probes: Iterable[Probe],
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize engine, validating the probe requirements graph."""
        self.ordered_probes = order_probes(list(probes))
        self.clock = clock
        logger.info(
            "Probe execution order: "
            f"{', '.join(probe.key() for probe in self.ordered_probes)}"
        )

    def create_context(
        self,
        scm_repository: Path | None = None,
        update_center: UpdateCenter | None = None,
        github: GitHubClient | None = None,
    ) -> ProbeContext:
        """Build the context of one plugin run, stamped with the engine clock."""
        return ProbeContext(
            scm_repository=scm_repository,
            update_center=update_center,
            github=github,
            timestamp=self.clock(),
        )

    async def run(
        self,
        plugin: Plugin,
        context: ProbeContext,
        cancel_event: asyncio.Event | None = None,
    ) -> Plugin:
        """Run every eligible probe on the plugin and merge the results.

        Probes run one after the other so that each one sees the results
        merged before it. Setting ``cancel_event`` stops the run before the
        next probe; results already merged are kept.
        """
        logger.info(f"Running probes on {plugin.name}")

        for probe in self.ordered_probes:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Run on {plugin.name} cancelled before {probe.key()}")
                break

            if not should_run(probe, plugin, context):
                continue

            result = await self._apply(probe, plugin, context)
            if plugin.add_details(result):
                logger.info(f"{plugin.name}: {result.key} = {result.status.value}")

        return plugin

    async def run_all(
        self,
        plugins: Iterable[Plugin],
        context_factory: Callable[[Plugin], ProbeContext],
        concurrency: int = 4,
    ) -> list[Plugin]:
        """Run probes on several plugins, at most ``concurrency`` at a time.

        If one plugin run raises, the runs still in flight are cancelled and
        the error propagates.

        Raises:
            ValueError: If ``concurrency`` is lower than 1

        """
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")

        semaphore = asyncio.Semaphore(concurrency)

        async def _run_one(plugin: Plugin) -> Plugin:
            async with semaphore:
                return await self.run(plugin, context_factory(plugin))

        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(_run_one(plugin)) for plugin in plugins]

        return [task.result() for task in tasks]

    async def _apply(
        self, probe: Probe, plugin: Plugin, context: ProbeContext
    ) -> ProbeResult:
        """Run a probe body, turning exceptions into ERROR results."""
        key = probe.key()
        try:
            result = await probe.apply(plugin, context)
        except Exception as e:
            logger.warning(
                f"Probe {key} failed on {plugin.name}: {type(e).__name__}: {e}",
                exc_info=e,
            )
            return ProbeResult.error(key, str(e) or type(e).__name__, context.timestamp)

        if not isinstance(result, ProbeResult):
            logger.error(f"Probe {key} returned {type(result).__name__}")
            return ProbeResult.error(
                key, f"Probe returned {type(result).__name__}", context.timestamp
            )

        if result.key != key:
            logger.error(f"Probe {key} returned a result for {result.key}")
            return ProbeResult.error(
                key, f"Probe returned a result for {result.key}", context.timestamp
            )

        return result
