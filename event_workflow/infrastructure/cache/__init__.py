from event_workflow.infrastructure.cache.redis_lock_backend import RedisLockBackend

__all__ = ["RedisLockBackend"]
