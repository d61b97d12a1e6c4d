from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, cast

import redis  # type: ignore[import-untyped]

from pressroom.services._shared.ports import KeyValueStore

# KEYS[1] = key, ARGV[1] = expected value
LUA_COMPARE_AND_DELETE = r"""
if redis.call("GET", KEYS[1]) == ARGV[1] then
    return redis.call("DEL", KEYS[1])
end
return 0
"""


@dataclass(slots=True)
class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed :class:`KeyValueStore`.

    :param r: A connected client created with ``decode_responses=True``.
    :param scan_count: ``COUNT`` hint for each ``SCAN`` step.
    """

    r: redis.Redis
    scan_count: int = 200
    _cad: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Script object falls back from EVALSHA to EVAL when the cache is cold.
        self._cad = self.r.register_script(LUA_COMPARE_AND_DELETE)

    def get(self, key: str) -> str | None:
        return cast(str | None, self.r.get(key))

    def set(
        self,
        key: str,
        value: str,
        *,
        ttl: int | None = None,
        only_if_absent: bool = False,
    ) -> bool:
        ok = self.r.set(key, value, ex=ttl, nx=only_if_absent)
        return bool(ok)

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return int(self.r.delete(*keys))

    def keys(self, pattern: str) -> list[str]:
        """Incremental ``SCAN MATCH`` enumeration; never blocks the server like ``KEYS``."""
        return list(self.r.scan_iter(match=pattern, count=self.scan_count))

    def compare_and_delete(self, key: str, expected: str) -> bool:
        return int(self._cad(keys=[key], args=[expected])) == 1
