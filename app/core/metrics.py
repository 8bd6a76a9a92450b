"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry
import time
from functools import wraps
from typing import Callable

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation', 'table', 'status'],
    registry=registry
)

db_query_duration = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['table', 'operation'],
    registry=registry
)

integrity_violations = Counter(
    'integrity_violations_total',
    'Writes rejected by uniqueness, reference or lifecycle rules',
    ['kind', 'error'],
    registry=registry
)

rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total',
    'Total rate limit exceeded events',
    ['user_id'],
    registry=registry
)

audit_logs_created = Counter(
    'audit_logs_created_total',
    'Total audit logs created',
    ['action'],
    registry=registry
)

documents_rendered = Counter(
    'documents_rendered_total',
    'Total PDF documents rendered',
    ['document'],
    registry=registry
)

lifecycle_sweep_updates = Counter(
    'lifecycle_sweep_updates_total',
    'Rows moved to a new status by the lifecycle sweep',
    ['kind', 'status'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)

db_connected = Gauge(
    'db_connected',
    'Database connection status (1=connected, 0=disconnected)',
    registry=registry
)


def track_db_operation(operation: str):
    """Decorator to track EntityStore operation metrics.

    The wrapped coroutine must take the model class as its first argument
    after ``self``; its table name becomes the ``table`` label.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, model, *args, **kwargs):
            table = getattr(model, "__tablename__", "unknown")
            start_time = time.time()
            try:
                result = await func(self, model, *args, **kwargs)
                db_operations.labels(
                    operation=operation,
                    table=table,
                    status='success'
                ).inc()
                return result
            except Exception:
                db_operations.labels(
                    operation=operation,
                    table=table,
                    status='error'
                ).inc()
                raise
            finally:
                db_query_duration.labels(
                    table=table,
                    operation=operation
                ).observe(time.time() - start_time)
        return wrapper
    return decorator


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')
