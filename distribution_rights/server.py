from __future__ import annotations

import logging
from typing import Optional

from distribution_rights.config.settings import AppConfig
from distribution_rights.tools import (
    add_distributor_tool,
    add_permission_tool,
    check_permission_tool,
    list_distributors_tool,
)

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:  # pragma: no cover - dependency is optional at import time
    FastMCP = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _require_server() -> "FastMCP":
    if FastMCP is None:
        raise SystemExit(
            "The mcp package is required to run the server. "
            "Install it with `pip install distribution-rights[server]`."
        ) from _IMPORT_ERROR
    return FastMCP("distribution-rights-server")


def _validate_required(name: str, value: Optional[str]) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {name}")


def _json_payload(model) -> dict:
    return model.model_dump(mode="json")


def handle_add_distributor(config: AppConfig, name: str, parentName: Optional[str] = None) -> dict:
    _validate_required("name", name)
    return _json_payload(add_distributor_tool(name, parentName, config=config))


def handle_add_permission(config: AppConfig, name: str, region: str, ruleType: str = "include") -> dict:
    _validate_required("name", name)
    _validate_required("region", region)
    return _json_payload(add_permission_tool(name, region, ruleType, config=config))


def handle_check_permission(config: AppConfig, name: str, region: str) -> dict:
    _validate_required("name", name)
    _validate_required("region", region)
    return _json_payload(check_permission_tool(name, region, config=config))


def handle_list_distributors(config: AppConfig) -> dict:
    return _json_payload(list_distributors_tool(config=config))


def build_server(config: Optional[AppConfig] = None) -> "FastMCP":
    server = _require_server()
    config = config or AppConfig.from_env()

    @server.tool(description="Register a distributor, optionally under an existing parent distributor.")
    def add_distributor(name: str, parentName: Optional[str] = None) -> dict:
        return handle_add_distributor(config, name, parentName)

    @server.tool(
        description="Add an include or exclude region rule to a distributor. "
        "Includes must already be authorized by the parent distributor."
    )
    def add_permission(name: str, region: str, ruleType: str = "include") -> dict:
        return handle_add_permission(config, name, region, ruleType)

    @server.tool(description="Check whether a distributor may operate in a region code such as LA-CA-US.")
    def check_permission(name: str, region: str) -> dict:
        return handle_check_permission(config, name, region)

    @server.tool(description="List all distributors with their parent and include/exclude rules.")
    def list_distributors() -> dict:
        return handle_list_distributors(config)

    return server


def main() -> None:
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    server = build_server(config)
    server.run()


if __name__ == "__main__":
    main()
