"""Shared: cross-cutting helpers (telemetry, request provenance, utilities)."""
