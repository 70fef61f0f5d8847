"""Queue client layer for queueboard.

Both engine families are consumed through the QueueClient protocol:
BullMQ queues via the ``bullmq`` package, Bull v3 queues via LegacyQueue.
"""

from queueboard_api.queue.legacy import LegacyQueue, LegacyQueueError
from queueboard_api.queue.protocol import QueueClient

__all__ = [
    "LegacyQueue",
    "LegacyQueueError",
    "QueueClient",
]
