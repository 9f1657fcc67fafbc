#!/usr/bin/env python3
"""Simple CLI for running Ankr actions locally"""

import argparse
import asyncio
import sys

from ankr_plugin.actions import build_registry
from ankr_plugin.config import settings
from ankr_plugin.core.runtime import HandlerResult, InMemoryRuntime, Memory
from ankr_plugin.errors import PluginError
from ankr_plugin.logging_config import setup_logging


def print_actions(registry) -> None:
    """Pretty print the action manifest"""
    print(f"\n📋 {len(registry)} actions")
    print("=" * 50)
    for action in registry:
        print(f"{action.name}")
        print(f"    {action.description}")
        print(f"    Similes: {', '.join(action.similes)}")
        for conversation in action.examples:
            for turn in conversation:
                print(f"    e.g. \"{turn.text}\"")


async def cli_run(text: str, action_name: str) -> int:
    """Run one action against a chat message"""
    registry = build_registry()
    action = registry.get(action_name)
    if action is None:
        print(f"❌ Unknown action: {action_name}")
        return 1

    runtime = InMemoryRuntime()
    message = Memory.from_text(text, agent_id=runtime.agent_id)

    def show(result: HandlerResult) -> None:
        prefix = "✅" if result.success else "❌"
        print(f"\n{prefix} {action.name}")
        print("-" * 50)
        print(result.text)

    print(f"🔍 Running {action.name}...")
    try:
        await action.handler(runtime, message, callback=show)
    except PluginError as e:
        print(f"\n⚠️  {e.kind.value} error")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ankr Plugin CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("actions", help="List registered actions")

    run_parser = subparsers.add_parser("run", help="Run one action against a message")
    run_parser.add_argument("text", help="Chat message, e.g. \"What's the price of ETH?\"")
    run_parser.add_argument("--action", required=True, help="Action name or simile, e.g. GET_TOKEN_PRICE_ANKR")

    return parser


async def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(settings.log_level)
    command = args.command.lower()

    if command == "actions":
        print_actions(build_registry())
        return 0

    if command == "run":
        return await cli_run(args.text, args.action)

    print(f"❌ Unknown command: {command}")
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
