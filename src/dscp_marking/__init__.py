"""Client-side orchestration for the DSCP packet-marking service.

This package hosts the logic that sits between the command-line surface and
the remote ``dscppb.DscpService``.  A single command is turned into a list of
per-instance RPCs and the collected responses are rendered for the operator.
It covers:

* checking marking parameters before anything is sent over the wire;
* resolving which dataplane instances a command applies to, either from the
  operator's list or by asking the service for every known instance;
* issuing one RPC per target instance, strictly in order, stopping at the
  first failure; and
* rendering ``show``/``list`` results as a tree or as JSON.

The transport itself lives in :mod:`dscp_gateway`; everything here only talks
to the :class:`dscp_gateway.DscpGateway` interface so tests can swap in an
in-memory implementation.
"""

from .controller import DscpController  # noqa: F401
from .errors import DscpError, RenderError, RpcError, ValidationError  # noqa: F401
from .models import MarkingFlag, MarkingPolicy, ShowResult, Target  # noqa: F401
from .render import OutputFormat  # noqa: F401

__all__ = [
    "DscpController",
    "DscpError",
    "MarkingFlag",
    "MarkingPolicy",
    "OutputFormat",
    "RenderError",
    "RpcError",
    "ShowResult",
    "Target",
    "ValidationError",
]
