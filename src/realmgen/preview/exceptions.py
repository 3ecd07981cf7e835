"""Exceptions raised by the preview server launcher."""

from realmgen.exceptions import RealmgenError


class PreviewLaunchError(RealmgenError):
    """Raised when the preview server reports an error or exits unsuccessfully."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class PreviewTimeoutError(PreviewLaunchError):
    """Raised when the streaming probe sees no status marker before its deadline."""
