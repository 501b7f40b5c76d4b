"""Retry and backoff utilities for calls against the remote employee service."""

from .retry import RetryController, RetryPolicy, with_retry

__all__ = ["RetryController", "RetryPolicy", "with_retry"]
