from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

import pytest

from dscp_gateway import DscpGateway
from dscp_marking.errors import RpcError
from dscp_marking.models import InstanceConfigs, MarkingPolicy, ShowResult


class RecordingGateway(DscpGateway):
    """In-memory gateway that records every call and can fail on demand."""

    def __init__(
        self,
        configs: Sequence[InstanceConfigs] = (),
        results: Dict[int, ShowResult] | None = None,
        fail_on: Set[int] | None = None,
    ) -> None:
        self.configs = list(configs)
        self.results = dict(results or {})
        self.fail_on = set(fail_on or ())
        self.calls: List[Tuple[str, object]] = []
        self.closed = False

    def _record(self, method: str, request) -> None:
        self.calls.append((method, request))
        if request is not None and request.target.instance in self.fail_on:
            raise RpcError(f"{method} failed: UNAVAILABLE: instance down", method=method)

    async def list_configs(self):
        self.calls.append(("list_configs", None))
        return list(self.configs)

    async def show_config(self, request):
        self._record("show_config", request)
        return self.results.get(
            request.target.instance, ShowResult(instance=request.target.instance)
        )

    async def add_prefixes(self, request):
        self._record("add_prefixes", request)

    async def remove_prefixes(self, request):
        self._record("remove_prefixes", request)

    async def set_marking(self, request):
        self._record("set_marking", request)

    async def close(self):
        self.closed = True

    def instances_called(self, method: str) -> List[int]:
        return [req.target.instance for name, req in self.calls if name == method]


def build_gateway(fail_on: Set[int] | None = None) -> RecordingGateway:
    return RecordingGateway(
        configs=[
            InstanceConfigs(instance=0, configs=("dscp0", "edge")),
            InstanceConfigs(instance=1, configs=("dscp0",)),
        ],
        results={
            0: ShowResult(
                instance=0,
                marking=MarkingPolicy(flag=2, mark=46),
                prefixes=("10.0.0.0/8", "2001:db8::/32"),
            ),
            1: ShowResult(instance=1, prefixes=("192.0.2.0/24",)),
        },
        fail_on=fail_on,
    )


@pytest.fixture
def gateway() -> RecordingGateway:
    return build_gateway()


@pytest.fixture
def make_gateway():
    return build_gateway
