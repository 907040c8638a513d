# files_manager/stores/jobs.py
import json

import redis


class RedisJobQueue:
    """One-way job channel: payloads are pushed as JSON onto a Redis list.

    Nothing here waits for a worker; whoever pops the list owns delivery.
    """

    def __init__(self, client: redis.Redis, queue_name: str):
        self._redis = client
        self.queue_name = queue_name

    def enqueue(self, payload: dict) -> None:
        self._redis.rpush(self.queue_name, json.dumps(payload))
