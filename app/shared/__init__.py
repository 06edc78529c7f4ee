"""Shared cross-cutting helpers: telemetry (logging, tracing) and utilities.

Used by application, infrastructure, and pages. No business logic.
"""
