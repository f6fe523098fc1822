"""
archscan - classify installed macOS applications by CPU architecture.
"""

from archscan.descriptor import classify, extract_architecture
from archscan.metadata import read_executable_name
from archscan.models import ApplicationBundle, Architecture, ScanResult, ScanStats
from archscan.report import render_json, render_report
from archscan.scanner import APPLICATIONS_ROOT, inspect_executable, scan_applications

__version__ = "1.0.0"

__all__ = [
    "APPLICATIONS_ROOT",
    "ApplicationBundle",
    "Architecture",
    "ScanResult",
    "ScanStats",
    "classify",
    "extract_architecture",
    "inspect_executable",
    "read_executable_name",
    "render_json",
    "render_report",
    "scan_applications",
]
