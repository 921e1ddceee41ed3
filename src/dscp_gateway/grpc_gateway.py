"""gRPC implementation of :class:`DscpGateway` on top of ``grpc.aio``.

A single insecure channel is opened per command and reused for every call.
Wire messages are converted into :mod:`dscp_marking.models` types here so the
controller never deals with protobuf objects.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import grpc

from dscp_marking.errors import ConfigError, RpcError
from dscp_marking.models import (
    AddPrefixesRequest,
    InstanceConfigs,
    MarkingPolicy,
    RemovePrefixesRequest,
    SetMarkingRequest,
    ShowConfigRequest,
    ShowResult,
    Target,
)

from . import proto
from .base import DscpGateway

LOG = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "grpc://[::1]:8080"

_SCHEMES = ("grpc://", "http://")


def grpc_target(endpoint: str) -> str:
    """Turn ``grpc://host:port`` into the ``host:port`` form grpc dials."""

    for scheme in _SCHEMES:
        if endpoint.startswith(scheme):
            endpoint = endpoint[len(scheme):]
            break
    endpoint = endpoint.rstrip("/")
    if not endpoint:
        raise ConfigError("gateway endpoint must not be empty")
    return endpoint


def target_to_pb(target: Target):
    return proto.TargetModule(
        config_name=target.config_name,
        dataplane_instance=target.instance,
    )


def show_response_to_result(response) -> ShowResult:
    if not response.HasField("config"):
        return ShowResult(instance=response.instance)
    config = response.config
    marking = None
    if config.HasField("dscp_config"):
        marking = MarkingPolicy(flag=config.dscp_config.flag, mark=config.dscp_config.mark)
    return ShowResult(
        instance=response.instance,
        marking=marking,
        prefixes=tuple(config.prefixes),
    )


def list_response_to_summary(response) -> List[InstanceConfigs]:
    return [
        InstanceConfigs(instance=entry.instance, configs=tuple(entry.configs))
        for entry in response.instance_configs
    ]


class GrpcDscpGateway(DscpGateway):
    """Talks to ``dscppb.DscpService`` over a ``grpc.aio`` channel."""

    def __init__(self, channel: grpc.aio.Channel) -> None:
        self._channel = channel
        self._list_configs = self._stub("ListConfigs", proto.ListConfigsResponse)
        self._show_config = self._stub("ShowConfig", proto.ShowConfigResponse)
        self._add_prefixes = self._stub("AddPrefixes", proto.AddPrefixesResponse)
        self._remove_prefixes = self._stub("RemovePrefixes", proto.RemovePrefixesResponse)
        self._set_marking = self._stub("SetDscpMarking", proto.SetDscpMarkingResponse)

    @classmethod
    def connect(cls, endpoint: str = DEFAULT_ENDPOINT) -> "GrpcDscpGateway":
        target = grpc_target(endpoint)
        LOG.debug("opening gRPC channel to %s", target)
        return cls(grpc.aio.insecure_channel(target))

    async def close(self) -> None:
        await self._channel.close()

    def _stub(self, method: str, response_cls):
        return self._channel.unary_unary(
            proto.method_path(method),
            request_serializer=lambda message: message.SerializeToString(),
            response_deserializer=response_cls.FromString,
        )

    async def _invoke(self, method: str, stub, request, target: Optional[Target] = None):
        try:
            return await stub(request)
        except grpc.aio.AioRpcError as exc:
            code = exc.code()
            raise RpcError(
                f"{method} failed: {code.name}: {exc.details()}",
                method=method,
                code=code.name,
                target=target,
            ) from exc

    # ------------------------------------------------------------------
    # DscpGateway
    # ------------------------------------------------------------------
    async def list_configs(self) -> Sequence[InstanceConfigs]:
        response = await self._invoke(
            "ListConfigs", self._list_configs, proto.ListConfigsRequest()
        )
        return list_response_to_summary(response)

    async def show_config(self, request: ShowConfigRequest) -> ShowResult:
        message = proto.ShowConfigRequest(target=target_to_pb(request.target))
        response = await self._invoke(
            "ShowConfig", self._show_config, message, request.target
        )
        return show_response_to_result(response)

    async def add_prefixes(self, request: AddPrefixesRequest) -> None:
        message = proto.AddPrefixesRequest(
            target=target_to_pb(request.target), prefixes=list(request.prefixes)
        )
        await self._invoke("AddPrefixes", self._add_prefixes, message, request.target)

    async def remove_prefixes(self, request: RemovePrefixesRequest) -> None:
        message = proto.RemovePrefixesRequest(
            target=target_to_pb(request.target), prefixes=list(request.prefixes)
        )
        await self._invoke("RemovePrefixes", self._remove_prefixes, message, request.target)

    async def set_marking(self, request: SetMarkingRequest) -> None:
        message = proto.SetDscpMarkingRequest(
            target=target_to_pb(request.target),
            dscp_config=proto.DscpConfig(
                flag=request.marking.flag, mark=request.marking.mark
            ),
        )
        await self._invoke("SetDscpMarking", self._set_marking, message, request.target)
