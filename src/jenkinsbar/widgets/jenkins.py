"""The Jenkins status block.

One call to :meth:`JenkinsWidget.update` is one poll → aggregate → render
cycle. The widget keeps no build state between cycles, only the HTTP clients.
"""
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Callable

import requests

from ..builds import BuildResult
from ..client import JenkinsClient
from ..config import TrackedGroup, WidgetConfig
from ..errors import ClientError
from ..markup import GroupSummary, render_all
from ..summary import DISCONNECTED, reduce_group
from .base import WidgetUpdate

log = logging.getLogger(__name__)

name = "jenkins"

STATUS_OFFLINE = "offline"
STATUS_FAILED = "failed"
STATUS_BUILDING = "building"
STATUS_DEGRADED = "degraded"
STATUS_OK = "ok"

ClientFactory = Callable[..., JenkinsClient]

def bar_status(summaries: list[GroupSummary]) -> str:
    if not any(s.connected for s in summaries):
        return STATUS_OFFLINE
    if any(s.failed for s in summaries):
        return STATUS_FAILED
    if any(s.running for s in summaries):
        return STATUS_BUILDING
    if not all(s.connected for s in summaries):
        return STATUS_DEGRADED
    return STATUS_OK

class CycleAborted(Exception):
    pass

class JenkinsWidget:
    name = name

    def __init__(
        self,
        config: WidgetConfig,
        *,
        session: requests.Session | None = None,
        client_factory: ClientFactory = JenkinsClient,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.client_factory = client_factory
        self._clients: dict[tuple, JenkinsClient] = {}
        self._cycle_lock = threading.Lock()
        self._closing = threading.Event()

    def _client(self, group: TrackedGroup) -> JenkinsClient:
        key = (group.endpoint, group.username, group.token)
        client = self._clients.get(key)
        if client is None:
            client = self.client_factory(
                group.endpoint,
                username=group.username,
                token=group.token,
                timeout=self.config.timeout,
                session=self.session,
            )
            self._clients[key] = client
        return client

    def _connect(self) -> list[JenkinsClient | None]:
        clients: list[JenkinsClient | None] = []
        for group in self.config.groups:
            # Nothing to poll, so no client to build
            if not group.job_ids:
                clients.append(None)
                continue
            try:
                clients.append(self._client(group))
            except ClientError as e:
                if self.config.on_connect_error == "abort":
                    log.warning("%s: %s; skipping this update", group.name, e)
                    raise CycleAborted(str(e)) from e
                log.warning("%s: %s; showing it as disconnected", group.name, e)
                clients.append(None)
        return clients

    def _poll_one(self, client: JenkinsClient, job_id: str) -> BuildResult | None:
        if self._closing.is_set():
            return None
        try:
            return client.last_build(job_id)
        except Exception:
            log.warning("Polling %r on %s failed", job_id, client.endpoint, exc_info=True)
            return None

    def _poll(self, clients: list[JenkinsClient | None]) -> list[list[BuildResult | None]]:
        # One slot per (group, job); filled in place, read only once all polls are done
        slots: list[list[BuildResult | None]] = [[None] * len(g.job_ids) for g in self.config.groups]
        work = [
            (gi, ji, client, job_id)
            for gi, (group, client) in enumerate(zip(self.config.groups, clients))
            if client is not None
            for ji, job_id in enumerate(group.job_ids)
        ]

        if self.config.max_workers <= 1 or len(work) <= 1:
            for gi, ji, client, job_id in work:
                if self._closing.is_set():
                    raise CycleAborted("widget is closing")
                slots[gi][ji] = self._poll_one(client, job_id)
            return slots

        pool = ThreadPoolExecutor(max_workers=min(len(work), self.config.max_workers))
        try:
            futures = [(gi, ji, job_id, pool.submit(self._poll_one, client, job_id)) for gi, ji, client, job_id in work]
            # Queued polls wait for a worker, so the budget covers every round of them
            rounds = -(-len(work) // self.config.max_workers)
            deadline = time.monotonic() + self.config.timeout * (rounds + 1)
            for gi, ji, job_id, fut in futures:
                if self._closing.is_set():
                    raise CycleAborted("widget is closing")
                try:
                    slots[gi][ji] = fut.result(timeout=max(0.0, deadline - time.monotonic()))
                except FutureTimeout:
                    log.warning("Polling %r timed out", job_id)
                    fut.cancel()
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
        return slots

    def summarize(self) -> list[GroupSummary]:
        """Poll every tracked job and reduce each group, in config order.

        Raises :class:`CycleAborted` when the cycle must not produce output.
        """
        clients = self._connect()
        slots = self._poll(clients)
        if self._closing.is_set():
            raise CycleAborted("widget is closing")
        return [
            reduce_group(results) if client is not None else DISCONNECTED
            for client, results in zip(clients, slots)
        ]

    def update(self) -> WidgetUpdate | None:
        if self._closing.is_set():
            return None
        if not self._cycle_lock.acquire(blocking=False):
            log.debug("Previous update still running; skipping")
            return None
        try:
            summaries = self.summarize()
        except CycleAborted as e:
            log.info("No update this cycle: %s", e)
            return None
        finally:
            self._cycle_lock.release()

        return WidgetUpdate(
            content=render_all(zip(self.config.groups, summaries)),
            refresh_interval=self.config.update_frequency,
            name=self.name,
            status=bar_status(summaries),
        )

    def close(self) -> None:
        self._closing.set()
        self._clients.clear()
        self.session.close()
