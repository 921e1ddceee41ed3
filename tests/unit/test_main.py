import json

import pytest

from dscpctl.main import _verbosity, build_parser, main


@pytest.fixture(autouse=True)
def no_config_file(tmp_path, monkeypatch):
    monkeypatch.delenv("DSCPCTL_CONFIG", raising=False)
    monkeypatch.setattr("dscpctl.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")


def run_main(argv, gateway):
    endpoints = []

    def factory(endpoint):
        endpoints.append(endpoint)
        return gateway

    return main(argv, gateway_factory=factory), endpoints


def test_show_json(gateway, capsys):
    status, endpoints = run_main(["show", "--cfg", "dscp0", "--format", "json"], gateway)

    assert status == 0
    assert endpoints == ["grpc://[::1]:8080"]
    payload = json.loads(capsys.readouterr().out)
    assert [entry["instance"] for entry in payload] == [0, 1]
    assert payload[0]["marking"] == {"flag": 2, "mark": 46}
    assert gateway.closed is True


def test_show_tree_for_selected_instances(gateway, capsys):
    status, _ = run_main(["show", "-c", "dscp0", "-i", "0"], gateway)

    assert status == 0
    out = capsys.readouterr().out
    assert "Mark: 46 (0x2e)" in out
    assert "Instance 1" not in out


def test_prefix_add_accepts_repeated_flags(gateway, capsys):
    status, _ = run_main(
        ["prefix-add", "-c", "dscp0", "-i", "0", "-i", "1", "-p", "10.0.0.0/8", "2001:db8::/32"],
        gateway,
    )

    assert status == 0
    assert gateway.instances_called("add_prefixes") == [0, 1]
    assert gateway.calls[0][1].prefixes == ("10.0.0.0/8", "2001:db8::/32")
    assert capsys.readouterr().out == ""


def test_set_marking_invalid_mark_exits_nonzero(gateway, caplog):
    status, _ = run_main(
        ["set-marking", "-c", "dscp0", "-i", "0", "--flag", "1", "--mark", "64"], gateway
    )

    assert status == 1
    assert gateway.calls == []
    assert "Invalid mark value" in caplog.text


def test_rpc_failure_exits_nonzero(make_gateway, capsys):
    gateway = make_gateway(fail_on={1})

    status, _ = run_main(["prefix-remove", "-c", "dscp0", "-i", "0", "1", "-p", "10.0.0.0/8"], gateway)

    assert status == 1
    assert gateway.instances_called("remove_prefixes") == [0, 1]
    assert capsys.readouterr().out == ""


def test_endpoint_flag_and_config_file(gateway, tmp_path):
    config_path = tmp_path / "dscpctl.yaml"
    config_path.write_text("endpoint: grpc://from-file:1\nformat: json\n")

    _, endpoints = run_main(["--config", str(config_path), "show"], gateway)
    assert endpoints == ["grpc://from-file:1"]

    _, endpoints = run_main(
        ["--config", str(config_path), "show", "--endpoint", "grpc://from-flag:2"], gateway
    )
    assert endpoints == ["grpc://from-flag:2"]


def test_mutating_commands_require_instances():
    parser = build_parser()

    with pytest.raises(SystemExit):
        parser.parse_args(["prefix-add", "-c", "dscp0", "-p", "10.0.0.0/8"])


@pytest.mark.parametrize(
    "argv",
    [
        ["show", "-i", "-1"],
        ["show", "-i", "4294967296"],
        ["prefix-add", "-c", "x", "-i", "0", "-p", "10.0.0.1"],
    ],
)
def test_parser_rejects_malformed_values(argv):
    with pytest.raises(SystemExit):
        build_parser().parse_args(argv)


def test_show_failure_names_the_failing_instance(make_gateway, caplog, capsys):
    gateway = make_gateway(fail_on={1})

    status, _ = run_main(["show", "-c", "dscp0", "-i", "0", "1"], gateway)

    assert status == 1
    assert capsys.readouterr().out == ""
    errors = [r.getMessage() for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 1
    assert "dataplane instance 1" in errors[0]
    assert "config 'dscp0'" in errors[0]


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["-v", "show", "-v"], 2),
        (["show", "-vv"], 2),
        (["-vv", "show"], 2),
        (["show"], None),
    ],
)
def test_verbosity_counts_both_sides_of_subcommand(argv, expected):
    assert _verbosity(build_parser().parse_args(argv)) == expected


def test_main_registers_shell_completion(gateway, monkeypatch):
    parsers = []
    monkeypatch.setattr("dscpctl.main.argcomplete.autocomplete", parsers.append)

    status, _ = run_main(["show"], gateway)

    assert status == 0
    assert len(parsers) == 1
    assert "show" in parsers[0].format_help()
