# -*- test-case-name: txdict.test.test_client -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
A DICT (RFC 2229) client protocol.

To look up a word, connect to a server and call the query methods of the
L{DictClient} you get back::

    from twisted.internet import task
    from txdict.client import connect

    def main(reactor):
        d = connect(reactor, "dict.org")
        def lookup(client):
            d = client.define("protocol", "wn")
            d.addCallback(print)
            d.addBoth(lambda ignored: client.close())
            return d
        return d.addCallback(lookup)

    task.react(main)

Queries issued while another one is still being answered are queued and
sent once the previous reply has been read completely, so a single
L{DictClient} may be shared freely within the reactor thread.
"""

from zope.interface import implementer

from twisted.internet import defer
from twisted.internet.endpoints import HostnameEndpoint, connectProtocol
from twisted.logger import Logger, LogLevel
from twisted.protocols import basic

from txdict.atoms import checkAtom, quote, splitAtoms, splitFields
from txdict.error import (
    DictConnectionError,
    DictProtocolError,
    InvalidDatabase,
    InvalidStrategy,
)
from txdict.interfaces import IDictClient
from txdict.records import (
    ALL_DATABASES,
    DEFAULT_STRATEGY,
    Database,
    Definition,
    MatchingStrategy,
    nameOf,
)
from txdict.status import (
    DATABASES_PRESENT,
    DEFINITION_FOLLOWS,
    DEFINITIONS_RETRIEVED,
    INVALID_DATABASE,
    INVALID_STRATEGY,
    MATCHES_FOUND,
    NO_DATABASES,
    NO_MATCH,
    NO_STRATEGIES,
    SERVER_READY,
    STRATEGIES_AVAILABLE,
    parseStatusLine,
)

DEFAULT_PORT = 2628



class _Command:
    """
    A command waiting for, or in the middle of, its reply.

    @ivar name: The command verb, for messages.
    @type name: C{str}

    @ivar line: The command line sent to the server.
    @type line: C{str}

    @ivar expected: The status code which announces the reply's body.
    @type expected: C{int}

    @ivar body: The state reading the body: C{"TEXT"} for a list of lines
        ending with a C{"."} line, C{"DEFINITIONS"} for a sequence of
        definitions.
    @type body: C{str}

    @ivar consume: Called with each item of the body.

    @ivar result: Called without arguments once the reply is complete to
        produce the value the command's L{Deferred} fires with.

    @ivar empty: Status codes meaning the reply is complete and empty.
    @type empty: C{tuple} of C{int}

    @ivar word: The word being defined, for C{DEFINE}.
    @type word: C{str} or L{None}

    @ivar deferred: Fired with the result, or failed.
    @type deferred: L{defer.Deferred}
    """

    def __init__(self, name, line, expected, body, consume, result,
                 empty=(), word=None):
        self.name = name
        self.line = line
        self.expected = expected
        self.body = body
        self.consume = consume
        self.result = result
        self.empty = empty
        self.word = word
        self.deferred = defer.Deferred()



@implementer(IDictClient)
class DictClient(basic.LineOnlyReceiver):
    """
    DICT (RFC 2229) client.

    The client is a state machine driven one line at a time.  Its states
    are::

        GREETING -> WAITING -> INITIAL -> TEXT -> FINAL -> WAITING
                                       \\-> DEFINITIONS <-> DEFINITION_TEXT
                                                 \\-> WAITING

    plus C{FAILED}, entered when the server breaks the grammar of a reply or
    the connection is lost, and C{CLOSED}, entered by L{close}.  Neither can
    be left.

    @type greeting: C{str} or L{None}
    @ivar greeting: The text of the server greeting, once received.

    @type state: C{str}
    @ivar state: The current state.

    @ivar _lock: Serializes commands, so that a command is only sent once
        the reply to the previous one has been read completely.
    @type _lock: L{defer.DeferredLock}

    @ivar _current: The command whose reply is being read, if any.
    @type _current: L{_Command} or L{None}

    @ivar _definition: The database and lines of the definition being read.
    @type _definition: C{tuple} of (L{Database}, C{list} of C{str})

    @ivar _databases: The databases offered by the server, by name, in the
        order the server listed them.  Empty until first fetched; never
        fetched again afterwards.
    @type _databases: C{dict}

    @ivar _failure: Why the connection can no longer be used, if it can't.
    @type _failure: L{DictProtocolError} or L{None}
    """
    delimiter = b"\r\n"
    MAX_LENGTH = 8192
    encoding = "utf-8"

    greeting = None
    state = "GREETING"

    _log = Logger()

    def __init__(self):
        self._lock = defer.DeferredLock()
        self._current = None
        self._definition = None
        self._databases = {}
        self._failure = None
        self._lost = False
        self._greetWaiters = []
        self._closeWaiters = []


    # Twisted protocol callbacks
    def connectionLost(self, reason):
        """
        Fail whatever was waiting on the connection.
        """
        self._lost = True
        if self.state != "CLOSED":
            self.state = "FAILED"
            if self._failure is None:
                self._failure = DictProtocolError(
                    "Connection lost: %s" % (reason.getErrorMessage(),),
                    reason=reason)
        self._fireGreeted(DictConnectionError(
            "Connection lost before the server greeting", reason))
        command, self._current = self._current, None
        if command is not None:
            command.deferred.errback(DictProtocolError(
                "Connection lost during %s: %s"
                % (command.name, reason.getErrorMessage()),
                reason=reason))
        waiters, self._closeWaiters = self._closeWaiters, []
        for d in waiters:
            d.callback(None)


    def lineReceived(self, line):
        """
        Pass a received line to the handler for the current state.

        @type line: C{bytes}
        """
        line = line.decode(self.encoding, "replace")
        try:
            getattr(self, "state_" + self.state)(line)
        except DictProtocolError as e:
            self._fail(e)
        except ValueError as e:
            self._fail(DictProtocolError(str(e)))


    def lineLengthExceeded(self, line):
        """
        Give up on a server which sends an overlong line.
        """
        self._fail(DictProtocolError(
            "Line longer than %d bytes received" % (self.MAX_LENGTH,)))


    # State handlers
    def state_GREETING(self, line):
        """
        Expect the C{220} banner, and nothing else.
        """
        status = parseStatusLine(line)
        if status.code != SERVER_READY:
            raise DictProtocolError(
                "Unexpected greeting: %s" % (status,), status=status)
        self.greeting = status.text
        self.state = "WAITING"
        self._log.debug("Connected: {greeting}", greeting=self.greeting)
        self._fireGreeted(None)


    def state_WAITING(self, line):
        """
        Nothing is expected while no command is in flight.
        """
        self._log.warn("Ignoring unexpected line from server: {line!r}",
                       line=line)


    def state_INITIAL(self, line):
        """
        Read the status line which opens a reply.
        """
        status = parseStatusLine(line)
        command = self._current
        if status.code == command.expected:
            self.state = command.body
        elif status.code in command.empty:
            self._finish([])
        elif status.code == INVALID_DATABASE:
            self._reject(InvalidDatabase(str(status), status=status))
        elif status.code == INVALID_STRATEGY:
            self._reject(InvalidStrategy(str(status), status=status))
        else:
            raise DictProtocolError(
                "Unexpected reply to %s: %s" % (command.name, status),
                status=status)


    def state_TEXT(self, line):
        """
        Pass each line of a textual body on, until the C{"."} line.
        """
        if line == ".":
            self.state = "FINAL"
        else:
            self._current.consume(line)


    def state_FINAL(self, line):
        """
        Read the status line which ends a reply.
        """
        status = parseStatusLine(line)
        if not status.isTerminal:
            raise DictProtocolError(
                "Unexpected end of %s reply: %s"
                % (self._current.name, status), status=status)
        self._finish(self._current.result())


    def state_DEFINITIONS(self, line):
        """
        Expect either a C{151} line announcing one more definition, or the
        status line which ends the reply.
        """
        status = parseStatusLine(line)
        if status.code == DEFINITION_FOLLOWS:
            (word, name, description) = splitFields(status.text, 2)
            self._definition = (Database(name, description), [])
            self.state = "DEFINITION_TEXT"
        elif status.isTerminal:
            self._finish(self._current.result())
        else:
            raise DictProtocolError(
                "Unexpected line in DEFINE reply: %s" % (status,),
                status=status)


    def state_DEFINITION_TEXT(self, line):
        """
        Collect the lines of one definition, until the C{"."} line.
        """
        database, lines = self._definition
        if line == ".":
            self._definition = None
            text = "".join([l + "\r\n" for l in lines])
            self._current.consume(
                Definition(self._current.word, database, text))
            self.state = "DEFINITIONS"
        else:
            lines.append(line)


    def state_FAILED(self, line):
        """
        Lines arriving after a failure are not for us to interpret.
        """


    def state_CLOSED(self, line):
        """
        Ignore the farewell.
        """


    # Internals
    def _fireGreeted(self, error):
        waiters, self._greetWaiters = self._greetWaiters, []
        for d in waiters:
            if error is None:
                d.callback(self)
            else:
                d.errback(error)


    def _finish(self, result):
        """
        Complete the current command with C{result}.
        """
        command, self._current = self._current, None
        self.state = "WAITING"
        self._log.debug("{command} complete", command=command.name)
        command.deferred.callback(result)


    def _reject(self, error):
        """
        Fail the current command with C{error}, leaving the connection usable.
        """
        command, self._current = self._current, None
        self.state = "WAITING"
        command.deferred.errback(error)


    def _fail(self, error):
        """
        Give up on the connection: fail the current command with C{error} and
        drop the transport.
        """
        self._log.error("Dropping connection: {error}", error=error)
        self.state = "FAILED"
        self._failure = error
        self._definition = None
        self.transport.loseConnection()
        if self._greetWaiters:
            self._fireGreeted(DictConnectionError(str(error)))
        command, self._current = self._current, None
        if command is not None:
            command.deferred.errback(error)


    def _issue(self, command):
        return self._lock.run(self._send, command)


    def _send(self, command):
        """
        Send C{command} and return a L{defer.Deferred} firing with its result.
        Called with the lock held.
        """
        if self.state == "CLOSED":
            return defer.fail(DictProtocolError("Connection closed"))
        if self._failure is not None:
            return defer.fail(DictProtocolError(
                "Connection is no longer usable: %s" % (self._failure,),
                reason=self._failure.reason))
        if self.state != "WAITING":
            return defer.fail(DictProtocolError(
                "Cannot send %s in state %s" % (command.name, self.state)))
        self._current = command
        self.state = "INITIAL"
        self._log.debug("Sending {line!r}", line=command.line)
        self.sendLine(command.line.encode(self.encoding))
        return command.deferred


    def _checkWord(self, word):
        if not word or "\r" in word or "\n" in word:
            raise ValueError("%r cannot be looked up" % (word,))
        return word


    # External API
    def whenGreeted(self):
        """
        Wait for the server's C{220} greeting.

        @return: A L{defer.Deferred} firing with this client once greeted, or
            failing with L{DictConnectionError}.
        """
        if self.state == "CLOSED":
            return defer.fail(DictConnectionError("Connection closed"))
        if self.greeting is not None and self._failure is None:
            return defer.succeed(self)
        if self.state != "GREETING":
            return defer.fail(DictConnectionError(
                "Connection failed: %s" % (self._failure,)))
        d = defer.Deferred()
        self._greetWaiters.append(d)
        return d


    def define(self, word, database=ALL_DATABASES):
        """
        Send a C{DEFINE} command.

        @type word: C{str}
        @param word: The word to define.  It is always sent quoted.

        @type database: L{Database} or C{str}
        @param database: The database to search, or C{"*"} for every
            database, or C{"!"} for the first database with a definition.

        @rtype: L{defer.Deferred} firing with a C{list} of L{Definition}
        @return: The definitions sent by the server, in order.  The list is
            empty when the word was not found.
        """
        try:
            line = "DEFINE %s %s" % (checkAtom(nameOf(database)),
                                     quote(self._checkWord(word)))
        except ValueError:
            return defer.fail()
        definitions = []
        return self._issue(_Command(
            "DEFINE", line, DEFINITIONS_RETRIEVED, "DEFINITIONS",
            definitions.append, lambda: definitions, empty=(NO_MATCH,),
            word=word))


    def match(self, word, strategy=DEFAULT_STRATEGY, database=ALL_DATABASES):
        """
        Send a C{MATCH} command.

        @type word: C{str}
        @param word: The word to match.  It is always sent quoted.

        @type strategy: L{MatchingStrategy} or C{str}
        @param strategy: How to match, for example C{"prefix"}.  C{"."}
            leaves the choice to the server.

        @type database: L{Database} or C{str}
        @param database: The database to search, or C{"*"} or C{"!"}.

        @rtype: L{defer.Deferred} firing with a C{list} of C{str}
        @return: The matched words, in the order they were first sent, each
            listed once even when found in several databases.
        """
        try:
            line = "MATCH %s %s %s" % (checkAtom(nameOf(database)),
                                       checkAtom(nameOf(strategy)),
                                       quote(self._checkWord(word)))
        except ValueError:
            return defer.fail()
        matches = {}

        def consume(line):
            atoms = splitAtoms(line)
            if len(atoms) < 2:
                raise DictProtocolError("Malformed match: %r" % (line,))
            matches.setdefault(atoms[1], None)

        return self._issue(_Command(
            "MATCH", line, MATCHES_FOUND, "TEXT", consume,
            lambda: list(matches), empty=(NO_MATCH,)))


    def listDatabases(self):
        """
        Send a C{SHOW DB} command, unless the databases are already known.

        @rtype: L{defer.Deferred} firing with a C{list} of L{Database}
        @return: The databases, in the order the server listed them.
        """
        return self._lock.run(self._listDatabases)


    def _listDatabases(self):
        if self._databases:
            return defer.succeed(list(self._databases.values()))
        databases = {}

        def consume(line):
            (name, description) = splitFields(line, 1)
            databases[name] = Database(name, description)

        def result():
            self._databases.update(databases)
            return list(self._databases.values())

        return self._send(_Command(
            "SHOW DB", "SHOW DB", DATABASES_PRESENT, "TEXT", consume, result,
            empty=(NO_DATABASES,)))


    def listStrategies(self):
        """
        Send a C{SHOW STRAT} command.

        @rtype: L{defer.Deferred} firing with a C{list} of
            L{MatchingStrategy}
        @return: The strategies, in the order the server listed them, each
            name listed once.
        """
        strategies = {}

        def consume(line):
            (name, description) = splitFields(line, 1)
            strategies.setdefault(name, MatchingStrategy(name, description))

        return self._issue(_Command(
            "SHOW STRAT", "SHOW STRAT", STRATEGIES_AVAILABLE, "TEXT",
            consume, lambda: list(strategies.values()),
            empty=(NO_STRATEGIES,)))


    def close(self):
        """
        Send C{QUIT} and drop the connection, ignoring any error.

        @rtype: L{defer.Deferred} firing with L{None}
        @return: A deferred which fires once the connection is gone.
        """
        return self._lock.run(self._quit)


    def _quit(self):
        if self.transport is None:
            self.state = "CLOSED"
            return defer.succeed(None)
        if self.state not in ("CLOSED", "FAILED"):
            try:
                self.sendLine(b"QUIT")
            except Exception:
                self._log.failure("Ignoring error sending QUIT",
                                  level=LogLevel.debug)
        self.state = "CLOSED"
        self._current = None
        try:
            self.transport.loseConnection()
        except Exception:
            self._log.failure("Ignoring error closing connection",
                              level=LogLevel.debug)
        if self._lost:
            return defer.succeed(None)
        d = defer.Deferred()
        self._closeWaiters.append(d)
        return d



def connectEndpoint(endpoint):
    """
    Connect a L{DictClient} through C{endpoint} and wait for the server's
    greeting.

    @type endpoint: L{twisted.internet.interfaces.IStreamClientEndpoint}

    @rtype: L{defer.Deferred} firing with L{DictClient}
    @return: The connected client, or a failure with L{DictConnectionError}.
        When the greeting is wrong the connection has already been dropped
        by the time the failure is delivered.
    """
    def connectFailed(reason):
        if reason.check(DictConnectionError):
            return reason
        raise DictConnectionError(
            "Could not connect: %s" % (reason.getErrorMessage(),), reason)

    d = connectProtocol(endpoint, DictClient())
    d.addCallback(lambda client: client.whenGreeted())
    d.addErrback(connectFailed)
    return d



def connect(reactor, host, port=DEFAULT_PORT):
    """
    Connect to the DICT server at C{host} and C{port}.

    @type host: C{str}
    @type port: C{int}

    @rtype: L{defer.Deferred} firing with L{DictClient}
    @see: L{connectEndpoint}
    """
    return connectEndpoint(HostnameEndpoint(reactor, host, port))



__all__ = ["DictClient", "DEFAULT_PORT", "connect", "connectEndpoint"]
