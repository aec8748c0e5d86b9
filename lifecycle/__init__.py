"""
Model Lifecycle Module.

Downloads the published model retirement document, parses its tables into
lifecycle records, and reconciles them with scanned deployments.
"""

from lifecycle.record import LifecycleRecord, ModelType
from lifecycle.fetcher import DocumentFetcher, FetchError, FetchResult
from lifecycle.parser import LifecycleTableParser
from lifecycle.joiner import ReconciliationJoiner

__all__ = [
    "LifecycleRecord",
    "ModelType",
    "DocumentFetcher",
    "FetchError",
    "FetchResult",
    "LifecycleTableParser",
    "ReconciliationJoiner",
]
