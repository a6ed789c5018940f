"""Shared cross-cutting helpers (telemetry, time, identifiers)."""
