from celery import Celery
from app.core.config import settings

celery_app = Celery(
    "worker",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_BACKEND,
)
celery_app.conf.task_routes = {"app.services.tasks.sweep_lifecycle": {"queue": "lifecycle"}}
celery_app.conf.beat_schedule = {
    "sweep-lifecycle": {
        "task": "app.services.tasks.sweep_lifecycle",
        "schedule": float(settings.LIFECYCLE_SWEEP_INTERVAL),
    },
}


@celery_app.task(bind=True, max_retries=3)
def sweep_lifecycle(self):
    import asyncio
    from app.services.tasks_internal import sweep_lifecycle_async

    try:
        return asyncio.run(sweep_lifecycle_async())
    except Exception as e:
        retry_kwargs = {"countdown": 2 ** self.request.retries}
        raise self.retry(exc=e, **retry_kwargs)
