"""
Command-line interface for the Math MCP server.
"""
import argparse
import json
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ServerConfig
from .core.errors import McpError
from .core.mcp_server import run_mcp_server, setup_logging
from .tools.registry import build_default_registry

console = Console()
err_console = Console(stderr=True)


def start_server(args):
    """Start the MCP server on stdin/stdout."""
    config = ServerConfig.from_env()
    setup_logging(config)
    # stdout carries protocol frames only
    err_console.print(f"[green]Starting {config.server_name} {config.server_version} on stdio[/green]")
    try:
        run_mcp_server(config)
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted[/yellow]")
    return 0


def list_tools(args):
    """Show registered tools."""
    registry = build_default_registry(ServerConfig.from_env())

    table = Table(title=f"Math MCP Tools ({len(registry)})")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Arguments", style="magenta")
    table.add_column("Description", style="white")

    for descriptor in registry.all_descriptors():
        properties = descriptor.input_schema.get("properties", {})
        required = set(descriptor.input_schema.get("required", []))
        params = ", ".join(
            name if name in required else f"{name}?" for name in properties
        )
        table.add_row(descriptor.name, params, descriptor.description)

    console.print(table)
    return 0


def call_tool(args):
    """Run a single tool locally and print its result."""
    try:
        arguments = json.loads(args.arguments)
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid JSON arguments: {escape(str(e))}[/red]")
        return 2

    registry = build_default_registry(ServerConfig.from_env())
    try:
        result = registry.execute_tool(args.tool, arguments)
    except McpError as e:
        err_console.print(f"[red]❌ {args.tool} failed: {escape(str(e))}[/red]")
        return 1

    console.print_json(data=result)
    return 0


def generate_config(args):
    """Generate an MCP client configuration block."""
    config = {
        "mcpServers": {
            "math": {
                "command": sys.executable,
                "args": ["-m", "math_mcp.core.mcp_server"],
                "env": {
                    "MCP_LOG_LEVEL": "WARNING"
                }
            }
        }
    }

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(config, f, indent=2)
        console.print(f"✅ Configuration saved to: {args.output}")
    else:
        console.print("📋 MCP client configuration:")
        console.print_json(data=config)
        console.print("\n💡 Add this to your MCP client's settings file")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Math MCP Command Line Interface")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server on stdio")
    serve_parser.set_defaults(func=start_server)

    tools_parser = subparsers.add_parser("tools", help="List available tools")
    tools_parser.set_defaults(func=list_tools)

    call_parser = subparsers.add_parser("call", help="Run one tool locally")
    call_parser.add_argument("tool", help="Tool name")
    call_parser.add_argument("arguments", nargs="?", default="{}", help="Tool arguments as a JSON object")
    call_parser.set_defaults(func=call_tool)

    config_parser = subparsers.add_parser("config", help="Generate MCP configuration")
    config_parser.add_argument("--output", help="Output file for configuration")
    config_parser.set_defaults(func=generate_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
