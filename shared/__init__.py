"""
Shared utilities for the NeverBounce client.

This package aggregates the building blocks used by the client library,
its command-line entry point and the mock server:

- config: Client configuration via pydantic-settings
- logging: Structured logging with correlation and secret redaction
- errors: Canonical error types and the JSON error envelope

Do not import from the neverbounce package into shared/.
"""
