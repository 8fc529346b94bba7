"""Namespace resolution, readiness checks and operator log mining."""
