"""
Shared utilities for the merchant API client.

This package aggregates the ambient building blocks used by the client:

- config: Client configuration via pydantic-settings
- logging: Structured logging with per-dispatch correlation
- metrics: Prometheus counters for fetches and dispatch attempts
- errors: Typed failures surfaced to callers
- retry: Opt-in transport retry policy

Do not import from service_merchant into shared/.
"""
