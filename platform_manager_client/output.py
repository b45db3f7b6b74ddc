"""
Output formatting utilities for the platform CLI tool.

Supports table, JSON and YAML renderings of simple records.
"""

import json
from typing import Any, Dict, List, Optional

import yaml
from tabulate import tabulate  # type: ignore[import-untyped]

FORMATS = ("table", "json", "yaml")


def format_table(data: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> str:
    """
    Format a list of records as a table.

    Args:
        data: Records to format
        columns: Column names to include (defaults to the keys of the first record)

    Returns:
        Formatted table string
    """
    if not data:
        return "No data available."

    if columns is None:
        columns = list(data[0].keys())

    rows = []
    for item in data:
        row = []
        for col in columns:
            value = item.get(col)
            if value is None:
                row.append("")
            elif isinstance(value, (dict, list)):
                row.append(json.dumps(value))
            else:
                row.append(str(value))
        rows.append(row)

    result: str = tabulate(rows, headers=columns, tablefmt="simple")
    return result


def format_output(data: Dict[str, Any], format: str) -> str:
    """
    Format a single record.

    Tables render the record as key/value rows.

    Raises:
        ValueError: If format is not recognized
    """
    format = format.lower()

    if format == "json":
        return json.dumps(data, indent=2, default=str)
    elif format == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip("\n")
    elif format == "table":
        rows = [{"key": k, "value": v} for k, v in data.items()]
        return format_table(rows, ["key", "value"])
    else:
        raise ValueError(f"Unknown format: {format}. Use 'table', 'json', or 'yaml'.")
