"""
Prometheus metrics configuration
"""
from prometheus_client import (CONTENT_TYPE_LATEST, Counter, Histogram,
                               generate_latest)
from prometheus_client.registry import REGISTRY

# ============================================================================
# HTTP Request Metrics
# ============================================================================

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

# ============================================================================
# Generation Provider Metrics
# ============================================================================

generation_requests_total = Counter(
    'generation_requests_total',
    'Total number of completion requests sent to the generation provider',
    ['model', 'status']  # status: 'success', 'error'
)

generation_request_duration_seconds = Histogram(
    'generation_request_duration_seconds',
    'Generation provider request duration in seconds',
    ['model'],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0)
)

# ============================================================================
# Joke Metrics
# ============================================================================

generated_jokes_total = Counter(
    'generated_jokes_total',
    'Total number of generated jokes recorded for signed-in users'
)

saved_jokes_total = Counter(
    'saved_jokes_total',
    'Total number of save-punchline requests by outcome',
    ['outcome']  # 'success' or the error reason
)


def get_metrics():
    """
    Get Prometheus metrics in text format

    Returns:
        bytes: Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_metrics_content_type():
    """Content type for the metrics endpoint"""
    return CONTENT_TYPE_LATEST
