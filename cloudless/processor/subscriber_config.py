"""Settings of queue and subscription consumers driving a processor."""

from __future__ import annotations

from dataclasses import dataclass, field

from cloudless.processor.config import Config

_MAX_VISIBILITY_SEC = 43200


def _visibility_timeout(max_exec_time_ms: int) -> int:
    """Return twice the execution time in the source's units, capped at 12 hours."""
    return min(_MAX_VISIBILITY_SEC, 2 * max_exec_time_ms * 1000)


@dataclass
class SQSConfig:
    """SQS consumer settings along with the processor settings."""

    config: Config = field(default_factory=Config)
    queue_name: str = ""
    batch_size: int = 0
    wait_time_seconds: int = 0
    visibility_timeout: int = 0

    def init(self) -> None:
        """Fill in default values, including those of the processor settings."""
        self.config.init()
        if self.batch_size == 0:
            self.batch_size = 10
        if self.wait_time_seconds == 0:
            self.wait_time_seconds = 20
        if self.visibility_timeout == 0:
            self.visibility_timeout = _visibility_timeout(self.config.max_exec_time_ms)

    def validate(self) -> None:
        if not self.queue_name:
            raise ValueError("queue name is empty")


@dataclass
class PubSubConfig:
    """Pub/Sub consumer settings along with the processor settings."""

    config: Config = field(default_factory=Config)
    project_id: str = ""
    subscription: str = ""
    batch_size: int = 0
    message_concurrency: int = 0
    visibility_timeout: int = 0

    def init(self) -> None:
        """Fill in default values, including those of the processor settings."""
        self.config.init()
        if self.batch_size == 0:
            self.batch_size = 100
        if self.message_concurrency == 0:
            self.message_concurrency = 20
        if self.visibility_timeout == 0:
            self.visibility_timeout = _visibility_timeout(self.config.max_exec_time_ms)

    def validate(self) -> None:
        if not self.subscription:
            raise ValueError("subscription were empty")