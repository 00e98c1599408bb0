"""Prometheus metrics for the intake portal."""

from prometheus_client import Counter, Histogram

# Upload proxy metrics
uploads_total = Counter(
    "intake_uploads_total",
    "Total files forwarded to object storage",
    ["category", "status"]  # status: success|error
)

upload_size_bytes = Histogram(
    "intake_upload_size_bytes",
    "Size of stored files in bytes",
    ["category"],
    buckets=[10_000, 100_000, 500_000, 1_000_000, 5_000_000, 10_000_000, 25_000_000, 50_000_000]
)

# Submission metrics
submissions_total = Counter(
    "intake_submissions_total",
    "Total submission attempts by outcome",
    ["outcome"]  # outcome: success|partial|total_failure|persistence_error
)

submission_files_skipped_total = Counter(
    "intake_submission_files_skipped_total",
    "Files skipped inside otherwise processed submissions",
    ["category"]
)
