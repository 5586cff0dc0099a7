"""
This file contains various exceptions raised while resolving and provisioning runtimes.
"""


class MultiruntimeException(Exception):
    """
    Exceptions raised by multiruntime
    """

    def __init__(self, message: str):
        super().__init__(message)


class NetworkError(MultiruntimeException):
    """
    Raised when an upstream catalog or artifact could not be fetched.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class MalformedCatalog(MultiruntimeException):
    """
    Raised when the top-level structure of an upstream catalog cannot be parsed.
    """

    pass


class UnsupportedTarget(MultiruntimeException):
    """
    Raised when no build exists for the requested platform, either because no
    provider knows the platform or because no artifact survived selection.
    """

    pass


class InvalidVersionConstraint(MultiruntimeException):
    """
    Raised when a version range read from project metadata cannot be parsed.
    The version constraint source recovers from it as "no constraint".
    """

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        super().__init__(f"Invalid version constraint {expression!r}: {reason}")
