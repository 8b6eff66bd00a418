"""Shared fakes: no test talks to a real Jenkins."""

from __future__ import annotations

import pytest

from jenkinsbar.config import TrackedGroup, WidgetConfig


class FakeClient:
    """Stands in for JenkinsClient; answers from a {job_id: BuildResult | None} map."""

    def __init__(self, endpoint, *, builds=None, **kwargs):
        self.endpoint = endpoint
        self.builds = builds or {}
        self.kwargs = kwargs
        self.calls: list[str] = []

    def last_build(self, job_id):
        self.calls.append(job_id)
        result = self.builds.get(job_id)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def make_config():
    def _make(*groups, **kwargs):
        kwargs.setdefault("update_frequency", 30)
        return WidgetConfig(groups=tuple(groups), **kwargs)

    return _make


@pytest.fixture
def group():
    return TrackedGroup(endpoint="https://ci.example.org", name="CI", job_ids=("a", "b"))


@pytest.fixture
def client_factory():
    """Factory for JenkinsWidget; ``factory.builds[endpoint]`` feeds the fake clients."""

    class Factory:
        def __init__(self):
            self.builds: dict[str, dict] = {}
            self.created: list[FakeClient] = []

        def __call__(self, endpoint, **kwargs):
            client = FakeClient(endpoint, builds=self.builds.get(endpoint, {}), **kwargs)
            self.created.append(client)
            return client

    return Factory()
