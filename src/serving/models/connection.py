"""Typed connection configs produced by store type handlers."""

from datetime import timedelta
from enum import Enum

from pydantic import Field

from .base import ServingBaseModel


class ReadFrom(str, Enum):
    """Read preference for clustered Redis connections."""

    MASTER = "master"
    MASTER_PREFERRED = "masterPreferred"
    UPSTREAM = "upstream"
    UPSTREAM_PREFERRED = "upstreamPreferred"
    REPLICA = "replica"
    REPLICA_PREFERRED = "replicaPreferred"
    SLAVE = "slave"
    SLAVE_PREFERRED = "slavePreferred"
    NEAREST = "nearest"
    LOWEST_LATENCY = "lowestLatency"
    ANY = "any"
    ANY_REPLICA = "anyReplica"

    @classmethod
    def from_token(cls, token: str) -> "ReadFrom":
        """Resolve a token by value ('replicaPreferred') or name ('REPLICA_PREFERRED').

        Matching ignores case only.

        Raises:
            ValueError: If the token names no read preference
        """
        wanted = token.strip().lower()
        for member in cls:
            if wanted in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unrecognized read preference: {token!r}")


class RedisStoreConfig(ServingBaseModel):
    """Single-node Redis connection settings."""

    host: str
    port: int = Field(gt=0)
    ssl: bool = False
    password: str = ""

    @property
    def url(self) -> str:
        """Build Redis URL."""
        scheme = "rediss" if self.ssl else "redis"
        if self.password:
            return f"{scheme}://:{self.password}@{self.host}:{self.port}"
        return f"{scheme}://{self.host}:{self.port}"


class RedisClusterStoreConfig(ServingBaseModel):
    """Clustered Redis connection settings."""

    connection_string: str
    read_from: ReadFrom
    timeout: timedelta
