"""Shared infrastructure.

Settings, logging, database engines and observability primitives used by
the membership bounded context. Nothing here depends on a bounded context.
"""
