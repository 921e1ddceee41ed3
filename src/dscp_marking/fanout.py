"""Sequential fan-out of one logical operation over several targets.

Requests are issued one at a time, in target order, and the first failure
stops the whole operation.  For mutating calls this means the targets before
the failing one keep their new state while the rest are never contacted.
There is no rollback and no retry.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Sequence, TypeVar

from .errors import RpcError
from .models import Target

LOG = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

Req = TypeVar("Req")
Resp = TypeVar("Resp")


async def execute(
    targets: Sequence[Target],
    build_request: Callable[[Target], Req],
    call: Callable[[Req], Awaitable[Resp]],
) -> List[Resp]:
    """Issue ``call(build_request(target))`` for each target in order.

    Returns one response per target in the same order.  An :class:`RpcError`
    from ``call`` is re-raised as is, after recording the failing target and
    the targets already processed on the exception.
    """

    responses: List[Resp] = []
    completed: List[Target] = []
    for target in targets:
        request = build_request(target)
        LOG.log(TRACE, "request on dataplane instance %s: %r", target.instance, request)
        try:
            response = await call(request)
        except RpcError as exc:
            if exc.target is None:
                exc.target = target
            exc.completed = tuple(completed)
            raise
        LOG.debug("response on dataplane instance %s: %r", target.instance, response)
        responses.append(response)
        completed.append(target)
    return responses
