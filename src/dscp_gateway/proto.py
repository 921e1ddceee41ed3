"""Protobuf message classes for ``dscppb.DscpService``.

The schema is assembled into a private descriptor pool at import time so the
package does not depend on generated ``_pb2`` modules.  It is equivalent to::

    // common/proto/target.proto
    package commonpb;
    message TargetModule {
        string config_name = 1;
        uint32 dataplane_instance = 2;
    }

    // dscppb/dscp.proto
    package dscppb;
    service DscpService {
        rpc ListConfigs(ListConfigsRequest) returns (ListConfigsResponse);
        rpc ShowConfig(ShowConfigRequest) returns (ShowConfigResponse);
        rpc AddPrefixes(AddPrefixesRequest) returns (AddPrefixesResponse);
        rpc RemovePrefixes(RemovePrefixesRequest) returns (RemovePrefixesResponse);
        rpc SetDscpMarking(SetDscpMarkingRequest) returns (SetDscpMarkingResponse);
    }
    message DscpConfig { uint32 flag = 1; uint32 mark = 2; }
    message Config { repeated string prefixes = 1; DscpConfig dscp_config = 2; }
    message InstanceConfigs { uint32 instance = 1; repeated string configs = 2; }
    message ListConfigsRequest {}
    message ListConfigsResponse { repeated InstanceConfigs instance_configs = 1; }
    message ShowConfigRequest { commonpb.TargetModule target = 1; }
    message ShowConfigResponse { uint32 instance = 1; Config config = 2; }
    message AddPrefixesRequest { commonpb.TargetModule target = 1; repeated string prefixes = 2; }
    message AddPrefixesResponse {}
    message RemovePrefixesRequest { commonpb.TargetModule target = 1; repeated string prefixes = 2; }
    message RemovePrefixesResponse {}
    message SetDscpMarkingRequest { commonpb.TargetModule target = 1; DscpConfig dscp_config = 2; }
    message SetDscpMarkingResponse {}
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

SERVICE_NAME = "dscppb.DscpService"

_F = descriptor_pb2.FieldDescriptorProto
_STRING = _F.TYPE_STRING
_UINT32 = _F.TYPE_UINT32
_MESSAGE = _F.TYPE_MESSAGE

# (name, number, type, repeated, message type name)
FieldSpec = Tuple[str, int, int, bool, Optional[str]]


def _add_message(
    file_proto: descriptor_pb2.FileDescriptorProto,
    name: str,
    fields: Iterable[FieldSpec] = (),
) -> None:
    message = file_proto.message_type.add(name=name)
    for field_name, number, field_type, repeated, type_name in fields:
        field = message.field.add(
            name=field_name,
            number=number,
            type=field_type,
            label=_F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL,
        )
        if type_name:
            field.type_name = type_name


def _common_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="common/proto/target.proto", package="commonpb", syntax="proto3"
    )
    _add_message(
        file_proto,
        "TargetModule",
        [
            ("config_name", 1, _STRING, False, None),
            ("dataplane_instance", 2, _UINT32, False, None),
        ],
    )
    return file_proto


def _dscp_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="dscppb/dscp.proto",
        package="dscppb",
        syntax="proto3",
        dependency=["common/proto/target.proto"],
    )
    target = ("target", 1, _MESSAGE, False, ".commonpb.TargetModule")
    _add_message(
        file_proto,
        "DscpConfig",
        [("flag", 1, _UINT32, False, None), ("mark", 2, _UINT32, False, None)],
    )
    _add_message(
        file_proto,
        "Config",
        [
            ("prefixes", 1, _STRING, True, None),
            ("dscp_config", 2, _MESSAGE, False, ".dscppb.DscpConfig"),
        ],
    )
    _add_message(
        file_proto,
        "InstanceConfigs",
        [("instance", 1, _UINT32, False, None), ("configs", 2, _STRING, True, None)],
    )
    _add_message(file_proto, "ListConfigsRequest")
    _add_message(
        file_proto,
        "ListConfigsResponse",
        [("instance_configs", 1, _MESSAGE, True, ".dscppb.InstanceConfigs")],
    )
    _add_message(file_proto, "ShowConfigRequest", [target])
    _add_message(
        file_proto,
        "ShowConfigResponse",
        [
            ("instance", 1, _UINT32, False, None),
            ("config", 2, _MESSAGE, False, ".dscppb.Config"),
        ],
    )
    for op in ("AddPrefixes", "RemovePrefixes"):
        _add_message(file_proto, f"{op}Request", [target, ("prefixes", 2, _STRING, True, None)])
        _add_message(file_proto, f"{op}Response")
    _add_message(
        file_proto,
        "SetDscpMarkingRequest",
        [target, ("dscp_config", 2, _MESSAGE, False, ".dscppb.DscpConfig")],
    )
    _add_message(file_proto, "SetDscpMarkingResponse")

    service = file_proto.service.add(name="DscpService")
    for method in ("ListConfigs", "ShowConfig", "AddPrefixes", "RemovePrefixes", "SetDscpMarking"):
        service.method.add(
            name=method,
            input_type=f".dscppb.{method}Request",
            output_type=f".dscppb.{method}Response",
        )
    return file_proto


POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(_common_file().SerializeToString())
POOL.AddSerializedFile(_dscp_file().SerializeToString())


def _message(full_name: str):
    return message_factory.GetMessageClass(POOL.FindMessageTypeByName(full_name))


def method_path(method: str) -> str:
    return f"/{SERVICE_NAME}/{method}"


TargetModule = _message("commonpb.TargetModule")
DscpConfig = _message("dscppb.DscpConfig")
Config = _message("dscppb.Config")
InstanceConfigs = _message("dscppb.InstanceConfigs")
ListConfigsRequest = _message("dscppb.ListConfigsRequest")
ListConfigsResponse = _message("dscppb.ListConfigsResponse")
ShowConfigRequest = _message("dscppb.ShowConfigRequest")
ShowConfigResponse = _message("dscppb.ShowConfigResponse")
AddPrefixesRequest = _message("dscppb.AddPrefixesRequest")
AddPrefixesResponse = _message("dscppb.AddPrefixesResponse")
RemovePrefixesRequest = _message("dscppb.RemovePrefixesRequest")
RemovePrefixesResponse = _message("dscppb.RemovePrefixesResponse")
SetDscpMarkingRequest = _message("dscppb.SetDscpMarkingRequest")
SetDscpMarkingResponse = _message("dscppb.SetDscpMarkingResponse")
