#!/usr/bin/env python3
"""
Environment variables check utility.

Reports which settings are configured through the environment without
printing sensitive values.
"""
import os
import sys
from typing import Dict
from story_drafter.config import Settings, configure_logging

SENSITIVE_MARKERS = ("TOKEN", "KEY", "SECRET", "PAT")


def is_sensitive(name: str) -> bool:
    """Return True if a variable name looks like it holds a secret."""
    upper = name.upper()
    return any(marker in upper for marker in SENSITIVE_MARKERS)


def check_environment() -> Dict[str, str]:
    """
    Report the environment value for every setting.

    Returns:
        Mapping of upper-case variable name to its displayed value:
        the value itself, "[REDACTED]" for sensitive names, or "" when unset
    """
    report: Dict[str, str] = {}
    for field_name in Settings.model_fields:
        variable = field_name.upper()
        value = os.getenv(variable)
        if value is None:
            value = os.getenv(field_name)
        if value is None:
            report[variable] = ""
        elif is_sensitive(variable):
            report[variable] = "[REDACTED]"
        else:
            report[variable] = value
    return report


def main() -> int:
    configure_logging()
    print("\n=== Environment Variables Check ===\n")
    for variable, value in check_environment().items():
        if value:
            print(f"✅ {variable}: {value}")
        else:
            print(f"❌ {variable}: Not defined (using default if available)")
    print("\n=================================\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
