# -*- test-case-name: txdict -*-

# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
txdict: a DICT (RFC 2229) dictionary client for Twisted.
"""

from txdict._version import __version__
from txdict.client import DEFAULT_PORT, DictClient, connect, connectEndpoint
from txdict.error import (
    DictConnectionError,
    DictError,
    DictProtocolError,
    InvalidDatabase,
    InvalidStrategy,
)
from txdict.records import (
    ALL_DATABASES,
    DEFAULT_STRATEGY,
    FIRST_MATCH,
    Database,
    Definition,
    MatchingStrategy,
)

__all__ = [
    "__version__",
    "DEFAULT_PORT", "DictClient", "connect", "connectEndpoint",
    "DictError", "DictConnectionError", "DictProtocolError",
    "InvalidDatabase", "InvalidStrategy",
    "ALL_DATABASES", "DEFAULT_STRATEGY", "FIRST_MATCH",
    "Database", "Definition", "MatchingStrategy",
]
