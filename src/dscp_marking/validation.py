"""Parameter checks that run before any instance is contacted."""

from __future__ import annotations

import ipaddress
from typing import Sequence

from .errors import InvalidFlag, InvalidMark, MissingInstances
from .models import MAX_MARK, MarkingFlag, MarkingPolicy

UINT32_MAX = 2**32 - 1


def validate_marking(flag: int, mark: int) -> MarkingPolicy:
    """Return the policy for ``flag``/``mark`` or raise if out of range.

    The service is never asked to judge these values, so an invalid pair must
    abort the command before the first RPC.
    """

    if not 0 <= flag <= max(MarkingFlag):
        raise InvalidFlag(
            f"Invalid flag value {flag} (must be 0, 1, or 2)"
        )
    if not 0 <= mark <= MAX_MARK:
        raise InvalidMark(f"Invalid mark value {mark} (must be 0-{MAX_MARK})")
    return MarkingPolicy(flag=flag, mark=mark)


def require_instances(instances: Sequence[int], command: str) -> None:
    if not instances:
        raise MissingInstances(
            f"'{command}' requires at least one dataplane instance"
        )


def parse_uint32(value: str) -> int:
    number = int(value, 10)
    if not 0 <= number <= UINT32_MAX:
        raise ValueError(f"{value} is out of range for an unsigned 32-bit integer")
    return number


def parse_prefix(value: str) -> str:
    """Check that ``value`` is ``address/len`` and return it verbatim.

    Host bits are allowed; the service decides what they mean.
    """

    if not value or "/" not in value or not value.rsplit("/", 1)[1].isdigit():
        raise ValueError(f"'{value}' is not a network prefix (expected address/len)")
    ipaddress.ip_interface(value)
    return value
