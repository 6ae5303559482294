"""
Error types

Every error here is fatal for the build: nothing retries, nothing degrades.
"""


class BindgenError(Exception):
    """Base class for build-stopping errors"""


class DiscoveryError(BindgenError):
    """The native library could not be located"""


class ParseError(BindgenError):
    """A header could not be turned into declarations"""
