"""
Error taxonomy for TermBuddy

Everything raised here is fatal for a single invocation and is turned into
a one-line diagnostic plus exit code 1 at the CLI boundary.
"""

from typing import Optional


class TermBuddyError(Exception):
    """Base class for all fatal TermBuddy errors"""


class UsageError(TermBuddyError):
    """No request text was supplied"""


class ConfigMissingError(TermBuddyError):
    """The persisted configuration file does not exist"""


class ConfigInvalidError(TermBuddyError):
    """The persisted configuration file cannot be read or parsed"""


class UnknownProviderError(TermBuddyError):
    """The configured provider identifier is not supported"""

    def __init__(self, provider: str):
        super().__init__(f"Unknown provider: {provider}")
        self.provider = provider


class UpstreamError(TermBuddyError):
    """The provider call failed or returned something unusable"""

    def __init__(self, message: str, status_code: Optional[int] = None, provider: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.provider = provider


class ResponseFormatError(UpstreamError):
    """A 2xx response whose body lacks the generated text"""
