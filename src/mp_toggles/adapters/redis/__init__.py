"""Redis adapter – ToggleStore backed by Redis sets and strings."""
from mp_toggles.adapters.redis.store import RedisToggleStore

__all__ = ["RedisToggleStore"]
