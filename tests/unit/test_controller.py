import asyncio

import pytest

from dscp_marking import DscpController, OutputFormat
from dscp_marking.errors import RpcError
from dscp_marking.models import (
    AddPrefixesRequest,
    MarkingPolicy,
    RemovePrefixesRequest,
    SetMarkingRequest,
    Target,
)
from dscp_marking.render import parse_show_json


def test_show_without_instances_queries_every_known_instance(gateway):
    controller = DscpController(gateway)

    output = asyncio.run(controller.show("dscp0", [], OutputFormat.JSON))

    assert [r.instance for r in parse_show_json(output)] == [0, 1]
    assert [name for name, _ in gateway.calls] == ["list_configs", "show_config", "show_config"]


def test_show_with_explicit_instances_skips_discovery(gateway):
    controller = DscpController(gateway)

    output = asyncio.run(controller.show("dscp0", [1], OutputFormat.TREE))

    assert output.splitlines()[:2] == ["View Configs", "└── Instance 1"]
    assert gateway.instances_called("show_config") == [1]
    assert ("list_configs", None) not in gateway.calls


def test_show_without_config_name_lists_configs(gateway):
    controller = DscpController(gateway)

    output = asyncio.run(controller.show(None, [], OutputFormat.TREE))

    assert output.splitlines()[0] == "List Configs"
    assert "│   └── edge" in output
    assert gateway.calls == [("list_configs", None)]


def test_show_is_idempotent(gateway):
    controller = DscpController(gateway)

    first = asyncio.run(controller.show("dscp0", [], OutputFormat.JSON))
    second = asyncio.run(controller.show("dscp0", [], OutputFormat.JSON))

    assert first == second


def test_add_prefixes_fans_out_per_instance(gateway):
    controller = DscpController(gateway)

    asyncio.run(controller.add_prefixes("dscp0", [1, 0], ["10.0.0.0/8", "2001:db8::/32"]))

    assert gateway.calls == [
        ("add_prefixes", AddPrefixesRequest(Target("dscp0", 1), ("10.0.0.0/8", "2001:db8::/32"))),
        ("add_prefixes", AddPrefixesRequest(Target("dscp0", 0), ("10.0.0.0/8", "2001:db8::/32"))),
    ]


def test_remove_prefixes_fans_out_per_instance(gateway):
    controller = DscpController(gateway)

    asyncio.run(controller.remove_prefixes("dscp0", [2], ["10.0.0.0/8"]))

    assert gateway.calls == [
        ("remove_prefixes", RemovePrefixesRequest(Target("dscp0", 2), ("10.0.0.0/8",))),
    ]


def test_set_marking_sends_validated_policy(gateway):
    controller = DscpController(gateway)

    asyncio.run(controller.set_marking("dscp0", [0], 1, 10))

    assert gateway.calls == [
        ("set_marking", SetMarkingRequest(Target("dscp0", 0), MarkingPolicy(flag=1, mark=10))),
    ]


def test_partial_failure_leaves_earlier_instances_updated(make_gateway, caplog):
    gateway = make_gateway(fail_on={2})
    controller = DscpController(gateway)

    with pytest.raises(RpcError) as excinfo:
        asyncio.run(controller.set_marking("dscp0", [1, 2, 3], 2, 46))

    assert excinfo.value.target == Target("dscp0", 2)
    assert gateway.instances_called("set_marking") == [1, 2]
    assert "already updated" in caplog.text
