# Custom exceptions for winsdk-exports

from typing import Optional


class WinsdkError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ReportError(WinsdkError):
    """
    Base class for failures while parsing an inspection report.

    Raised from inside a block parser with only the offending line known;
    parse_report() re-raises it with the block index and header attached.
    """

    def __init__(
        self,
        message: str,
        line: Optional[str] = None,
        block_index: Optional[int] = None,
        block_header: Optional[str] = None,
    ):
        self.message = message
        self.line = line
        self.block_index = block_index
        self.block_header = block_header
        super().__init__(self._render())

    def _render(self) -> str:
        text = self.message
        if self.line is not None:
            text += f" (line: {self.line!r})"
        if self.block_index is not None:
            text += f" in block {self.block_index}"
            if self.block_header is not None:
                text += f" {self.block_header.rstrip()!r}"
        return text

    def with_block(self, block_index: int, block_header: str) -> "ReportError":
        """Return a copy of this error carrying the enclosing block context."""
        return type(self)(
            self.message,
            line=self.line,
            block_index=block_index,
            block_header=block_header,
        )


class FormatError(ReportError):
    """Raised when a line does not have its expected fixed-layout shape or label."""
    pass


class NameTypeError(ReportError):
    """Raised when an archive member carries an unrecognized name type."""
    pass


class ConfigError(WinsdkError):
    """Raised for configuration-related problems."""
    pass


class StoreCorruptionError(WinsdkError):
    """Raised if a persisted result file cannot be read back."""
    pass


class DumpbinError(WinsdkError):
    """Raised when the inspection tool is missing or fails."""

    def __init__(self, path: str, message: str, returncode: Optional[int] = None):
        self.path = path
        self.returncode = returncode
        super().__init__(f"dumpbin failed for {path}: {message}")
