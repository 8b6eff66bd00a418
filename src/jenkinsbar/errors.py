from __future__ import annotations

class JenkinsbarError(Exception):
    pass

class ConfigError(JenkinsbarError, ValueError):
    """The widget configuration cannot be used."""

class ClientError(JenkinsbarError):
    """No Jenkins client can be built for an endpoint."""
