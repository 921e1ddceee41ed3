"""Data structures shared by the DSCP client components.

All of these live for the duration of a single command.  Nothing is cached
between invocations: the service is always the source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence, Tuple


class MarkingFlag(IntEnum):
    """Condition under which the DSCP mark is applied to a packet."""

    NEVER = 0
    DEFAULT_IF_ZERO = 1
    ALWAYS = 2


MAX_MARK = 63


@dataclass(frozen=True)
class Target:
    """A configuration on one dataplane instance.

    Attributes
    ----------
    config_name:
        Name of the DSCP module configuration.
    instance:
        Index of the dataplane instance (unsigned 32-bit).
    """

    config_name: str
    instance: int


@dataclass(frozen=True)
class MarkingPolicy:
    """6-bit DSCP value plus the flag deciding when it is written."""

    flag: int
    mark: int


@dataclass(frozen=True)
class InstanceConfigs:
    """Configuration names known on a dataplane instance."""

    instance: int
    configs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ShowResult:
    """Observed state of one target.

    ``marking`` is ``None`` when the configuration has no marking policy set.
    Prefixes keep the order reported by the service.
    """

    instance: int
    marking: Optional[MarkingPolicy] = None
    prefixes: Tuple[str, ...] = field(default_factory=tuple)


# Requests handed to the gateway, one per target.


@dataclass(frozen=True)
class ShowConfigRequest:
    target: Target


@dataclass(frozen=True)
class AddPrefixesRequest:
    target: Target
    prefixes: Sequence[str]


@dataclass(frozen=True)
class RemovePrefixesRequest:
    target: Target
    prefixes: Sequence[str]


@dataclass(frozen=True)
class SetMarkingRequest:
    target: Target
    marking: MarkingPolicy
