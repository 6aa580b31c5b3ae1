"""Per-tool detectors."""

from envscout.runtime.detectors.base import ExecutableDetector, extract_version
from envscout.runtime.detectors.bun import BunDetector
from envscout.runtime.detectors.git import GitDetector
from envscout.runtime.detectors.git_bash import GitBashDetector
from envscout.runtime.detectors.node import NodeDetector
from envscout.runtime.detectors.wsl import (
    WslDetector,
    WslListing,
    classify_wsl_error,
    parse_wsl_list_output,
)

__all__ = [
    "ExecutableDetector",
    "extract_version",
    "NodeDetector",
    "GitDetector",
    "GitBashDetector",
    "BunDetector",
    "WslDetector",
    "WslListing",
    "classify_wsl_error",
    "parse_wsl_list_output",
]
