"""Prometheus metrics for monitoring loan limits, payday detection and provider health"""

from prometheus_client import Counter, Histogram

from affordability_gateway.domain.models import AffordabilityResult

# Affordability metrics
affordability_counter = Counter(
    "affordability_calculations_total",
    "Total affordability calculations",
    ["payday"],  # detected | not_detected
)

loan_limit_bucket_counter = Counter(
    "affordability_loan_limit_bucket",
    "Loan limits issued by bucket (smallest currency unit)",
    ["bucket"],  # 0 | 1-50k | 50k-200k | 200k+
)

# Provider metrics
mono_failure_counter = Counter(
    "mono_api_failures_total",
    "Failed bank data provider calls",
    ["reason"],  # invalid_credentials | not_found | unavailable | not_configured
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_affordability(result: AffordabilityResult) -> None:
    """Record payday detection rate and loan limit distribution"""
    payday = "detected" if result.payday_detected else "not_detected"
    affordability_counter.labels(payday=payday).inc()

    limit = result.max_loan_amount
    if limit == 0:
        bucket = "0"
    elif limit <= 50_000:
        bucket = "1-50k"
    elif limit <= 200_000:
        bucket = "50k-200k"
    else:
        bucket = "200k+"

    loan_limit_bucket_counter.labels(bucket=bucket).inc()
