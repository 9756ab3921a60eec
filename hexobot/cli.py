"""Command line access to the tool registry."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from hexobot.agent.tools.factory import build_tool_registry
from hexobot.config.loader import load_config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hexobot", description="Run hexobot tools from the command line.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.json")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("tools", help="List registered tools")

    call = sub.add_parser("call", help="Call a tool with JSON arguments")
    call.add_argument("tool", help="Tool name, e.g. hexo or web_search")
    call.add_argument("arguments", nargs="?", default="{}", help="JSON object of tool arguments")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    registry = build_tool_registry(load_config(args.config))

    if args.command == "tools":
        for definition in registry.get_definitions():
            fn = definition["function"]
            print(f"{fn['name']}: {fn['description']}")
        return 0

    try:
        params = json.loads(args.arguments)
    except json.JSONDecodeError as e:
        print(f"Error: arguments must be a JSON object ({e.msg})")
        return 2
    if not isinstance(params, dict):
        print("Error: arguments must be a JSON object")
        return 2

    result = asyncio.run(registry.execute(args.tool, params))
    print(result)
    return 1 if result.startswith("Error") else 0
