"""Checks behind `tehthu info`.

Reports which spreadsheet engines are importable and whether the
remembered dictionary still exists.
"""

from __future__ import annotations

from dataclasses import dataclass
import importlib.util
from typing import Dict, List

from .settings import SettingsStore


@dataclass
class CheckResult:
    """Outcome of one check, as shown in the `info` table."""

    name: str
    status: str  # "ok", "warn" or "error"
    detail: str


def _importable(module: str) -> bool:
    return importlib.util.find_spec(module) is not None


def _check_dependency(module: str, friendly: str, purpose: str, required: bool = False) -> CheckResult:
    if _importable(module):
        return CheckResult(friendly, "ok", f"import {module} works")
    status = "error" if required else "warn"
    return CheckResult(friendly, status, f"not installed; needed for {purpose}")


def _check_dictionary(settings: SettingsStore) -> CheckResult:
    info = settings.dictionary_info()
    if info.path is None:
        return CheckResult(
            "Default dictionary",
            "warn",
            "None remembered; run 'tehthu open <file>' or pass --dict.",
        )
    origin = "TEHTHU_DICTIONARY" if info.source == "env" else str(settings.settings_file)
    if not info.exists:
        return CheckResult(
            "Default dictionary",
            "warn",
            f"{info.path} (from {origin}) no longer exists.",
        )
    return CheckResult("Default dictionary", "ok", f"{info.path} (from {origin})")


def collect_diagnostics(settings: SettingsStore | None = None) -> List[CheckResult]:
    """Check the command-line stack, the spreadsheet engines and the default dictionary."""
    settings = settings or SettingsStore()
    checks: List[CheckResult] = []

    # Front end
    checks.append(_check_dependency("typer", "Typer", "the command line", required=True))
    checks.append(_check_dependency("rich", "Rich", "the command line", required=True))

    # Spreadsheet dictionaries
    checks.append(_check_dependency("pandas", "pandas", "spreadsheet dictionaries"))
    checks.append(_check_dependency("openpyxl", "openpyxl", ".xlsx dictionaries"))
    checks.append(_check_dependency("odf", "odfpy", ".ods dictionaries"))

    # Resources
    checks.append(_check_dictionary(settings))

    return checks


def summarize_checks(checks: List[CheckResult]) -> Dict[str, int]:
    """Number of checks per status."""
    counts = dict.fromkeys(("ok", "warn", "error"), 0)
    for check in checks:
        if check.status in counts:
            counts[check.status] += 1
    return counts
