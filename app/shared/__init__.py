"""Shared utilities: telemetry and cross-cutting helpers.

Used by application, infrastructure, and presentation. No business logic.
"""
