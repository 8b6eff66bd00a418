from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlsplit

import requests

from .builds import BuildResult
from .errors import ClientError

log = logging.getLogger(__name__)

def _job_path(job_id: str) -> str:
    # Folder jobs ("team/app") live under /job/team/job/app
    parts = [p for p in job_id.strip("/").split("/") if p]
    if not parts:
        raise ValueError(f"Empty job name: {job_id!r}")
    return "".join(f"/job/{quote(p, safe='')}" for p in parts)

class JenkinsClient:
    """Read-only access to the JSON API of one Jenkins instance."""

    def __init__(
        self,
        endpoint: str,
        *,
        username: str | None = None,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        parts = urlsplit(endpoint)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ClientError(f"Invalid Jenkins URL {endpoint!r}: expected http(s)://host[:port][/path]")
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.auth = (username, token or "") if username else None
        self.session = session or requests.Session()

    def _get_json(self, path: str) -> dict[str, Any]:
        r = self.session.get(f"{self.endpoint}{path}/api/json", auth=self.auth, timeout=self.timeout)
        r.raise_for_status()
        js = r.json()
        if not isinstance(js, dict):
            raise ValueError(f"Unexpected JSON payload from {path}")
        return js

    def get_job(self, job_id: str) -> dict[str, Any]:
        return self._get_json(_job_path(job_id))

    def get_build(self, job_id: str, number: int) -> dict[str, Any]:
        return self._get_json(f"{_job_path(job_id)}/{int(number)}")

    def last_build(self, job_id: str) -> BuildResult | None:
        """Latest build of ``job_id``, or ``None`` when it cannot be had.

        Unknown jobs, jobs that never ran, HTTP and network errors all end up
        as ``None``; the reason only goes to the debug log.
        """
        try:
            job = self.get_job(job_id)
            last = job.get("lastBuild")
            if not last or last.get("number") is None:
                log.debug("%s: job %r has no last build", self.endpoint, job_id)
                return None
            return BuildResult.from_json(self.get_build(job_id, last["number"]))
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            log.debug("%s: cannot fetch last build of %r: %s", self.endpoint, job_id, e)
            return None
