"""
CLI for inspecting resource metadata.

Imports the given modules, which register their classes into the default
registry as a side effect, then prints every table.
"""

import argparse
import importlib
import json
import logging

from hateoas_registry.logging_setup import setup_logging
from hateoas_registry.registry.metadata import get_registry

logger = logging.getLogger(__name__)


def format_description(description: dict) -> str:
    lines = ["Resource types:"]
    for key, cls in description["types"].items():
        lines.append(f"  {key:<24} {cls}")
    lines.append("Normalized -> denormalized:")
    for normalized, denormalized in description["normalization"].items():
        lines.append(f"  {normalized} -> {denormalized}")
    lines.append("Data services:")
    for domain, service in description["data_services"].items():
        lines.append(f"  {domain} -> {service}")
    for cls, entry in description["classes"].items():
        lines.append(f"{cls}:")
        for prop, d in entry.get("links", {}).items():
            many = "[]" if d["is_list"] else ""
            lines.append(f"  link          {prop} -> {d['target']}{many} via '{d['link_name']}'")
        for prop, d in entry.get("relationships", {}).items():
            many = "[]" if d["is_list"] else ""
            auto = "auto" if d["should_auto_resolve"] else "manual"
            lines.append(f"  relationship  {prop} -> {d['target']}{many} ({auto})")
        for prop, d in entry.get("resolved_links", {}).items():
            params = ", ".join(d["params"])
            lines.append(f"  resolved link {prop} -> {d['service']}.{d['method'] or 'find_by_href'}({params})")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print the resource metadata registered by the given modules"
    )

    parser.add_argument(
        "--module",
        action="append",
        default=[],
        help="Module to import before describing the registry (repeatable)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the registry as JSON instead of text"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: HAL_LOG_LEVEL / LOG_LEVEL env, else INFO)"
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    for module in args.module:
        try:
            importlib.import_module(module)
        except ImportError as e:
            logger.error(f"Could not import {module}: {e}")
            return 1
        logger.info(f"Imported {module}")

    description = get_registry().describe()
    if args.json:
        print(json.dumps(description, indent=2))
    else:
        print(format_description(description))
    return 0


if __name__ == "__main__":
    exit(main())
