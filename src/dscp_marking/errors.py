"""Error taxonomy for the DSCP client.

Callers react differently depending on where a command stopped:

ValidationError is raised before any RPC is issued, nothing changed remotely.
RpcError means the service or transport failed; for mutating commands some
instances may already carry the new state.
RenderError points at malformed intermediate data and is a defect, not a user
input problem.
"""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .models import Target


class DscpError(Exception):
    """Base class for all DSCP client exceptions."""


class ValidationError(DscpError):
    """Raised when command parameters are rejected client-side."""


class InvalidFlag(ValidationError):
    """Raised when the marking flag is outside ``0..2``."""


class InvalidMark(ValidationError):
    """Raised when the DSCP mark does not fit into 6 bits."""


class MissingInstances(ValidationError):
    """Raised when a mutating command names no dataplane instance."""


class RpcError(DscpError):
    """Raised when a gateway call fails.

    Attributes
    ----------
    method:
        Name of the RPC method that failed, when known.
    code:
        Transport status code name (e.g. ``"UNAVAILABLE"``), when known.
    target:
        The target the failing call was scoped to.  Filled in by the fan-out
        executor if the gateway did not set it.
    completed:
        Targets that were processed successfully before the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        code: Optional[str] = None,
        target: Optional["Target"] = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.code = code
        self.target = target
        self.completed: Sequence["Target"] = ()

    def __str__(self) -> str:
        message = super().__str__()
        if self.target is None:
            return message
        return (
            f"{message} (config '{self.target.config_name}', "
            f"dataplane instance {self.target.instance})"
        )


class RenderError(DscpError):
    """Raised when results cannot be serialized."""


class ConfigError(DscpError):
    """Raised when the CLI configuration file is invalid."""
