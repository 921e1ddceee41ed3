"""Command orchestrator for the DSCP service.

Each public coroutine maps to one CLI command.  The controller validates the
command, resolves targets, fans the RPC out through :mod:`.fanout` and, for
``show``, renders the collected results.  It keeps no state between commands.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar, TYPE_CHECKING

from . import fanout
from .errors import RpcError
from .models import (
    AddPrefixesRequest,
    RemovePrefixesRequest,
    SetMarkingRequest,
    ShowConfigRequest,
    ShowResult,
    Target,
)
from .render import OutputFormat, render_list, render_show
from .targets import build_targets, resolve_instances
from .validation import require_instances, validate_marking

if TYPE_CHECKING:  # pragma: no cover
    from dscp_gateway import DscpGateway

LOG = logging.getLogger(__name__)

Req = TypeVar("Req")
Resp = TypeVar("Resp")


class DscpController:
    """Runs DSCP commands against a :class:`~dscp_gateway.DscpGateway`."""

    def __init__(self, gateway: "DscpGateway") -> None:
        self._gateway = gateway

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------
    async def show(
        self,
        config_name: Optional[str],
        instances: Sequence[int] = (),
        fmt: OutputFormat = OutputFormat.TREE,
        *,
        color: bool = False,
    ) -> str:
        """Render the configuration ``config_name`` on ``instances``.

        Without a config name this lists the configurations known on every
        instance instead.  An empty ``instances`` list queries every instance
        the service reports.
        """

        if config_name is None:
            return await self.list_configs(fmt, color=color)

        resolved = await resolve_instances(self._gateway, instances)
        targets = build_targets(config_name, resolved)
        results: List[ShowResult] = await fanout.execute(
            targets, ShowConfigRequest, self._gateway.show_config
        )
        return render_show(results, fmt, color=color)

    async def list_configs(
        self, fmt: OutputFormat = OutputFormat.TREE, *, color: bool = False
    ) -> str:
        summary = await self._gateway.list_configs()
        LOG.debug("list configs response: %r", summary)
        return render_list(summary, fmt, color=color)

    # ------------------------------------------------------------------
    # Mutating commands
    # ------------------------------------------------------------------
    async def add_prefixes(
        self, config_name: str, instances: Sequence[int], prefixes: Sequence[str]
    ) -> None:
        require_instances(instances, "prefix-add")
        prefixes = tuple(prefixes)
        await self._apply(
            build_targets(config_name, instances),
            lambda target: AddPrefixesRequest(target=target, prefixes=prefixes),
            self._gateway.add_prefixes,
        )

    async def remove_prefixes(
        self, config_name: str, instances: Sequence[int], prefixes: Sequence[str]
    ) -> None:
        require_instances(instances, "prefix-remove")
        prefixes = tuple(prefixes)
        await self._apply(
            build_targets(config_name, instances),
            lambda target: RemovePrefixesRequest(target=target, prefixes=prefixes),
            self._gateway.remove_prefixes,
        )

    async def set_marking(
        self, config_name: str, instances: Sequence[int], flag: int, mark: int
    ) -> None:
        marking = validate_marking(flag, mark)
        require_instances(instances, "set-marking")
        await self._apply(
            build_targets(config_name, instances),
            lambda target: SetMarkingRequest(target=target, marking=marking),
            self._gateway.set_marking,
        )

    async def _apply(
        self,
        targets: Sequence[Target],
        build_request: Callable[[Target], Req],
        call: Callable[[Req], Awaitable[Resp]],
    ) -> None:
        try:
            await fanout.execute(targets, build_request, call)
        except RpcError as exc:
            if exc.completed:
                LOG.warning(
                    "instances %s were already updated before the failure",
                    [target.instance for target in exc.completed],
                )
            raise
        LOG.info(
            "applied change to dataplane instances %s",
            [target.instance for target in targets],
        )
