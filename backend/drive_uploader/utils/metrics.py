"""
Prometheus metrics definitions.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Drive upload metrics
drive_uploads_total = Counter(
    'drive_uploads_total',
    'Total files forwarded to Google Drive',
    ['status']
)

drive_upload_duration_seconds = Histogram(
    'drive_upload_duration_seconds',
    'Duration of a single Google Drive create-file call in seconds',
    ['status'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0]
)

# Staging metrics
staged_files_total = Counter(
    'staged_files_total',
    'Total parts written to the staging directory'
)

staged_files_cleanup_failures_total = Counter(
    'staged_files_cleanup_failures_total',
    'Total staged files that could not be removed'
)
