# -*- test-case-name: txdict.test.test_client -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Exceptions raised by the DICT client.
"""


class DictError(Exception):
    """
    The base class for all exceptions raised by L{txdict}.
    """



class DictConnectionError(DictError):
    """
    A connection to a DICT server could not be established: the host could
    not be resolved or reached, the connection was refused or dropped early,
    or the server did not greet the client with a C{220} reply.

    @ivar reason: The underlying L{Failure}, if the error was caused by the
        transport, otherwise L{None}.
    """

    def __init__(self, message, reason=None):
        DictError.__init__(self, message)
        self.reason = reason



class DictProtocolError(DictError):
    """
    The server's reply did not follow the grammar expected for the command
    in flight, or the connection was lost in the middle of an exchange.

    After this error the state of the connection is undefined; it should not
    be used to issue further commands.

    @ivar status: The offending L{txdict.status.StatusLine}, when the error
        was caused by an unexpected reply code, otherwise L{None}.

    @ivar reason: The underlying L{Failure}, when the error was caused by the
        transport, otherwise L{None}.
    """

    def __init__(self, message, status=None, reason=None):
        DictError.__init__(self, message)
        self.status = status
        self.reason = reason



class InvalidDatabase(DictProtocolError):
    """
    The server rejected the database named in the command (code C{550}).

    Unlike other protocol errors this is a complete reply, so the connection
    remains usable.
    """



class InvalidStrategy(DictProtocolError):
    """
    The server rejected the matching strategy named in the command (code
    C{551}).

    The connection remains usable.
    """



__all__ = [
    "DictError",
    "DictConnectionError",
    "DictProtocolError",
    "InvalidDatabase",
    "InvalidStrategy",
]
