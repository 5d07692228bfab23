# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{txdict.scripts.dictlookup}.
"""

from io import StringIO

from twisted.internet.error import ConnectionDone
from twisted.internet.testing import StringTransport
from twisted.python import usage
from twisted.python.failure import Failure
from twisted.trial import unittest

from txdict.client import DictClient
from txdict.records import Database, Definition, MatchingStrategy
from txdict.scripts import dictlookup
from txdict.test.test_client import ResolvingReactor



class OptionsTests(unittest.TestCase):
    """
    Tests for L{dictlookup.Options}.
    """

    def test_defaults(self):
        options = dictlookup.Options()
        options.parseOptions(["define", "test"])
        self.assertEqual(options["server"], "dict.org")
        self.assertEqual(options["port"], 2628)
        self.assertFalse(options["verbose"])
        self.assertEqual(options.subCommand, "define")
        self.assertEqual(options.subOptions["word"], "test")
        self.assertEqual(options.subOptions["database"], "*")


    def test_match(self):
        options = dictlookup.Options()
        options.parseOptions(["-s", "localhost", "-p", "2629", "-v", "match",
                              "-S", "prefix", "-d", "wn", "ice", "cream"])
        self.assertEqual(options["server"], "localhost")
        self.assertEqual(options["port"], 2629)
        self.assertTrue(options["verbose"])
        self.assertEqual(options.subOptions["word"], "ice cream")
        self.assertEqual(options.subOptions["strategy"], "prefix")
        self.assertEqual(options.subOptions["database"], "wn")


    def test_commandRequired(self):
        self.assertRaises(usage.UsageError,
                          dictlookup.Options().parseOptions, [])


    def test_wordRequired(self):
        self.assertRaises(usage.UsageError,
                          dictlookup.Options().parseOptions, ["define"])


    def test_badPort(self):
        self.assertRaises(usage.UsageError,
                          dictlookup.Options().parseOptions,
                          ["-p", "dict", "databases"])


    def test_parseOptionsExits(self):
        """
        L{dictlookup.parseOptions} exits with status 1 on usage errors.
        """
        self.patch(dictlookup.sys, "stderr", StringIO())
        exc = self.assertRaises(SystemExit, dictlookup.parseOptions,
                                ["nosuchcommand"])
        self.assertEqual(exc.code, 1)
        self.assertIn("ERROR:", dictlookup.sys.stderr.getvalue())



class FormattingTests(unittest.TestCase):

    def test_definitions(self):
        out = dictlookup.formatDefinitions([
            Definition("test", Database("wn", "WordNet"), "test\r\n  n. A trial.\r\n")])
        self.assertEqual(out, "From WordNet [wn]:\n\ntest\n  n. A trial.\n\n")


    def test_noDefinitions(self):
        self.assertEqual(dictlookup.formatDefinitions([]),
                         "No definitions found.\n")


    def test_matches(self):
        self.assertEqual(dictlookup.formatMatches(["test", "tester"]),
                         "test\ntester\n")
        self.assertEqual(dictlookup.formatMatches([]), "No matches found.\n")


    def test_descriptors(self):
        out = dictlookup.formatDescriptors([
            Database("foldoc", "Free On-line Dictionary of Computing"),
            Database("wn", "WordNet")])
        self.assertEqual(out, "foldoc  Free On-line Dictionary of Computing\n"
                              "wn      WordNet\n")
        self.assertEqual(
            dictlookup.formatDescriptors([MatchingStrategy("exact", "Exact")]),
            "exact  Exact\n")
        self.assertEqual(dictlookup.formatDescriptors([]), "")



class LookupTests(unittest.TestCase):
    """
    Tests for L{dictlookup.lookup}.
    """

    def setUp(self):
        self.client = DictClient()
        self.transport = StringTransport()
        self.client.makeConnection(self.transport)
        self.client.dataReceived(b"220 ready\r\n")
        self.stdout = StringIO()


    def lookup(self, *argv):
        options = dictlookup.Options()
        options.parseOptions(list(argv))
        return dictlookup.lookup(self.client, options, self.stdout)


    def test_define(self):
        d = self.lookup("define", "-d", "wn", "test")
        self.assertEqual(self.transport.value(), b'DEFINE wn "test"\r\n')
        self.client.dataReceived(
            b"150 1 definitions retrieved\r\n"
            b"151 test wn WordNet\r\n"
            b"n. A trial.\r\n"
            b".\r\n"
            b"250 ok\r\n")
        self.successResultOf(d)
        self.assertEqual(self.stdout.getvalue(),
                         "From WordNet [wn]:\n\nn. A trial.\n\n")


    def test_match(self):
        d = self.lookup("match", "-S", "prefix", "tes")
        self.assertEqual(self.transport.value(), b'MATCH * prefix "tes"\r\n')
        self.client.dataReceived(b"552 no match\r\n")
        self.successResultOf(d)
        self.assertEqual(self.stdout.getvalue(), "No matches found.\n")


    def test_databases(self):
        d = self.lookup("databases")
        self.client.dataReceived(
            b"110 1 databases present\r\nwn WordNet\r\n.\r\n250 ok\r\n")
        self.successResultOf(d)
        self.assertEqual(self.stdout.getvalue(), "wn  WordNet\n")


    def test_strategies(self):
        d = self.lookup("strategies")
        self.assertEqual(self.transport.value(), b"SHOW STRAT\r\n")
        self.client.dataReceived(
            b"111 1 strategies present\r\nexact Exact\r\n.\r\n250 ok\r\n")
        self.successResultOf(d)
        self.assertEqual(self.stdout.getvalue(), "exact  Exact\n")



class MainTests(unittest.TestCase):
    """
    Tests for L{dictlookup._main}.
    """

    def setUp(self):
        self.stdout = StringIO()
        self.stderr = StringIO()
        self.patch(dictlookup.sys, "stdout", self.stdout)
        self.patch(dictlookup.sys, "stderr", self.stderr)
        self.reactor = ResolvingReactor()
        self.transport = StringTransport()


    def main(self, *argv):
        """
        Run C{_main} with C{argv} against a server which has just greeted
        the client.
        """
        options = dictlookup.Options()
        options.parseOptions(["-s", "127.0.0.1"] + list(argv))
        d = dictlookup._main(self.reactor, options)
        self.protocol = self.reactor.accept(self.transport)
        self.protocol.dataReceived(b"220 ready\r\n")
        return d


    def disconnect(self):
        self.protocol.connectionLost(Failure(ConnectionDone()))


    def test_define(self):
        """
        The definitions are written to stdout and the connection is closed.
        """
        d = self.main("define", "-d", "wn", "test")
        self.protocol.dataReceived(
            b"150 1 definitions retrieved\r\n"
            b"151 test wn WordNet\r\n"
            b"n. A trial.\r\n"
            b".\r\n"
            b"250 ok\r\n")
        self.assertEqual(self.transport.value(),
                         b'DEFINE wn "test"\r\nQUIT\r\n')
        self.assertNoResult(d)
        self.disconnect()
        self.assertIsNone(self.successResultOf(d))
        self.assertEqual(self.stdout.getvalue(),
                         "From WordNet [wn]:\n\nn. A trial.\n\n")
        self.assertEqual(self.stderr.getvalue(), "")


    def test_serverError(self):
        """
        An error reply is printed to stderr and exits with status 1.
        """
        d = self.main("match", "-d", "nosuchdb", "test")
        self.protocol.dataReceived(b"550 invalid database\r\n")
        self.disconnect()
        exc = self.failureResultOf(d, SystemExit).value
        self.assertEqual(exc.code, 1)
        self.assertEqual(self.stderr.getvalue(),
                         "txdict: 550 invalid database\n")
        self.assertEqual(self.stdout.getvalue(), "")


    def test_invalidDatabase(self):
        """
        A database name the protocol cannot carry is reported on stderr,
        nothing but C{QUIT} is sent, and the exit status is 1.
        """
        d = self.main("define", "-d", "two words", "test")
        self.assertEqual(self.transport.value(), b"QUIT\r\n")
        self.disconnect()
        exc = self.failureResultOf(d, SystemExit).value
        self.assertEqual(exc.code, 1)
        self.assertTrue(self.stderr.getvalue().startswith("txdict: "))


    def test_invalidStrategy(self):
        d = self.main("match", "-S", 'pre"fix', "test")
        self.disconnect()
        self.assertEqual(self.failureResultOf(d, SystemExit).value.code, 1)
        self.assertTrue(self.stderr.getvalue().startswith("txdict: "))
