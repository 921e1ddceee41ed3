"""RPC gateway implementations for the DSCP control-plane service."""

from .base import DscpGateway  # noqa: F401
from .grpc_gateway import DEFAULT_ENDPOINT, GrpcDscpGateway, grpc_target  # noqa: F401

__all__ = [
    "DEFAULT_ENDPOINT",
    "DscpGateway",
    "GrpcDscpGateway",
    "grpc_target",
]
