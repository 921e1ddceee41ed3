"""Human and machine readable output for ``show`` and ``list`` results.

Tree output is drawn with :class:`rich.tree.Tree`.  Plain rendering disables
colour and terminal detection so the same results always give the same text.
"""

from __future__ import annotations

import io
import json
from enum import Enum
from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from .errors import RenderError
from .models import InstanceConfigs, MarkingFlag, MarkingPolicy, ShowResult


class OutputFormat(str, Enum):
    """Output format options."""

    TREE = "tree"
    JSON = "json"


FLAG_LABELS = {
    MarkingFlag.NEVER: "Never",
    MarkingFlag.DEFAULT_IF_ZERO: "Default (only if original DSCP is 0)",
    MarkingFlag.ALWAYS: "Always",
}

ROOT_STYLE = "bold"
INSTANCE_STYLE = "bold cyan"
GROUP_STYLE = "yellow"


def flag_label(flag: int) -> str:
    try:
        return FLAG_LABELS[MarkingFlag(flag)]
    except ValueError:
        return f"Unknown ({flag})"


def mark_label(mark: int) -> str:
    return f"{mark} (0x{mark:02x})"


def _node(parent: Tree, label: str, style: str = "") -> Tree:
    # Labels are literal text, never console markup.
    return parent.add(Text(label, style=style))


def render_tree(tree: Tree, *, color: bool = False) -> str:
    console = Console(
        file=io.StringIO(),
        width=1000,
        color_system="standard" if color else None,
        no_color=not color,
        force_terminal=color,
        highlight=False,
        emoji=False,
    )
    console.print(tree)
    lines = console.file.getvalue().splitlines()
    return "\n".join(line.rstrip() for line in lines)


# ----------------------------------------------------------------------
# show
# ----------------------------------------------------------------------
def build_show_tree(results: Sequence[ShowResult]) -> Tree:
    root = Tree(Text("View Configs", style=ROOT_STYLE))
    for result in results:
        instance = _node(root, f"Instance {result.instance}", INSTANCE_STYLE)
        if result.marking is not None:
            marking = _node(instance, "Marking", GROUP_STYLE)
            _node(marking, f"Flag: {flag_label(result.marking.flag)}")
            _node(marking, f"Mark: {mark_label(result.marking.mark)}")
        prefixes = _node(instance, "Prefixes", GROUP_STYLE)
        for idx, prefix in enumerate(result.prefixes):
            _node(prefixes, f"{idx}: {prefix}")
    return root


def show_result_to_dict(result: ShowResult) -> Dict[str, Any]:
    marking = None
    if result.marking is not None:
        marking = {"flag": result.marking.flag, "mark": result.marking.mark}
    return {
        "instance": result.instance,
        "marking": marking,
        "prefixes": list(result.prefixes),
    }


def show_result_from_dict(entry: Dict[str, Any]) -> ShowResult:
    marking_raw = entry.get("marking")
    marking = None
    if marking_raw is not None:
        marking = MarkingPolicy(flag=int(marking_raw["flag"]), mark=int(marking_raw["mark"]))
    return ShowResult(
        instance=int(entry["instance"]),
        marking=marking,
        prefixes=tuple(str(p) for p in entry.get("prefixes", [])),
    )


def render_show(
    results: Sequence[ShowResult], fmt: OutputFormat, *, color: bool = False
) -> str:
    if fmt is OutputFormat.JSON:
        return _dump_json([show_result_to_dict(result) for result in results])
    return render_tree(build_show_tree(results), color=color)


def parse_show_json(text: str) -> List[ShowResult]:
    """Inverse of :func:`render_show` in JSON mode."""

    payload = json.loads(text)
    if not isinstance(payload, list):
        raise ValueError("show output must be a JSON list")
    return [show_result_from_dict(entry) for entry in payload]


# ----------------------------------------------------------------------
# list
# ----------------------------------------------------------------------
def build_list_tree(summary: Sequence[InstanceConfigs]) -> Tree:
    root = Tree(Text("List Configs", style=ROOT_STYLE))
    for entry in summary:
        instance = _node(root, f"Instance {entry.instance}", INSTANCE_STYLE)
        for name in entry.configs:
            _node(instance, name)
    return root


def render_list(
    summary: Sequence[InstanceConfigs], fmt: OutputFormat, *, color: bool = False
) -> str:
    if fmt is OutputFormat.JSON:
        return _dump_json(
            [{"instance": entry.instance, "configs": list(entry.configs)} for entry in summary]
        )
    return render_tree(build_list_tree(summary), color=color)


def _dump_json(payload: Any) -> str:
    try:
        return json.dumps(payload, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise RenderError(f"failed to serialize output: {exc}") from exc
