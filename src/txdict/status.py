# -*- test-case-name: txdict.test.test_status -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
DICT status lines and reply codes.
"""

import re

import attr

from txdict.error import DictProtocolError

DATABASES_PRESENT = 110
STRATEGIES_AVAILABLE = 111
DEFINITIONS_RETRIEVED = 150
DEFINITION_FOLLOWS = 151
MATCHES_FOUND = 152
SERVER_READY = 220
CLOSING_CONNECTION = 221
OK = 250
INVALID_DATABASE = 550
INVALID_STRATEGY = 551
NO_MATCH = 552
NO_DATABASES = 554
NO_STRATEGIES = 555

_statusRe = re.compile(r"^([0-9]{3}) (.*)$", re.DOTALL)



@attr.s(frozen=True)
class StatusLine:
    """
    A reply line made of a three digit status code and free text.

    @ivar code: The status code.
    @type code: C{int}

    @ivar text: Everything after the code and its separating space.
    @type text: C{str}
    """
    code = attr.ib()
    text = attr.ib()

    @property
    def isTerminal(self):
        """
        Whether this line completes a command successfully (a 2xx code).
        """
        return 200 <= self.code < 300


    def __str__(self):
        return "%03d %s" % (self.code, self.text)



def parseStatusLine(line):
    """
    Parse C{line} as a status line.

    @type line: C{str}
    @rtype: L{StatusLine}

    @raise DictProtocolError: If C{line} is not a three digit code followed
        by a space and some text.
    """
    m = _statusRe.match(line)
    if m is None:
        raise DictProtocolError("Malformed status line: %r" % (line,))
    return StatusLine(int(m.group(1)), m.group(2))



__all__ = [
    "StatusLine", "parseStatusLine",
    "DATABASES_PRESENT", "STRATEGIES_AVAILABLE", "DEFINITIONS_RETRIEVED",
    "DEFINITION_FOLLOWS", "MATCHES_FOUND", "SERVER_READY",
    "CLOSING_CONNECTION", "OK", "INVALID_DATABASE", "INVALID_STRATEGY",
    "NO_MATCH", "NO_DATABASES", "NO_STRATEGIES",
]
