"""Abstract interface the DSCP controller talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from dscp_marking.models import (
    AddPrefixesRequest,
    InstanceConfigs,
    RemovePrefixesRequest,
    SetMarkingRequest,
    ShowConfigRequest,
    ShowResult,
)


class DscpGateway(ABC):
    """One coroutine per service operation.

    Implementations raise :class:`dscp_marking.errors.RpcError` for any
    transport or service failure.
    """

    @abstractmethod
    async def list_configs(self) -> Sequence[InstanceConfigs]:
        """Return configuration names per dataplane instance."""

    @abstractmethod
    async def show_config(self, request: ShowConfigRequest) -> ShowResult:
        """Return the observed state of ``request.target``."""

    @abstractmethod
    async def add_prefixes(self, request: AddPrefixesRequest) -> None:
        """Add ``request.prefixes`` to the input filter of the target."""

    @abstractmethod
    async def remove_prefixes(self, request: RemovePrefixesRequest) -> None:
        """Remove ``request.prefixes`` from the input filter of the target."""

    @abstractmethod
    async def set_marking(self, request: SetMarkingRequest) -> None:
        """Replace the marking policy of the target."""

    async def close(self) -> None:
        """Release transport resources."""

    async def __aenter__(self) -> "DscpGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
