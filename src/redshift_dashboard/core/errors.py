# src/redshift_dashboard/core/errors.py

from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors raised inside redshift_dashboard."""


class GatewayError(DashboardError):
    """Transport failure or malformed response from the sheet endpoint."""


class SessionCorruptError(DashboardError):
    """A persisted session record could not be parsed."""


class InconsistentStateError(DashboardError):
    """Authenticated, but there is no dashboard snapshot to show."""
