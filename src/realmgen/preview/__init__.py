"""Preview server launcher."""

from realmgen.preview.exceptions import PreviewLaunchError, PreviewTimeoutError
from realmgen.preview.launcher import LaunchMode, PreviewLauncher, ProbeOutcome, scan_chunk

__all__ = [
    "LaunchMode",
    "PreviewLaunchError",
    "PreviewLauncher",
    "PreviewTimeoutError",
    "ProbeOutcome",
    "scan_chunk",
]
