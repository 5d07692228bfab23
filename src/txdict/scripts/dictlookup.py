# -*- test-case-name: txdict.test.test_dictlookup -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Look words up on a DICT server from the command line.

Example usage::

    txdict define protocol
    txdict -s dict.org match --strategy prefix --database wn proto
    txdict databases
"""

import sys

from twisted.internet import task
from twisted.logger import globalLogBeginner, textFileLogObserver
from twisted.python import usage

from txdict.client import DEFAULT_PORT, connect
from txdict.error import DictError



class DefineOptions(usage.Options):
    synopsis = "WORD..."

    optParameters = [
        ["database", "d", "*",
         "The database to search: a name, * for all or ! for the first "
         "with a definition."],
    ]

    def parseArgs(self, *words):
        if not words:
            raise usage.UsageError("A word to define is required.")
        self["word"] = " ".join(words)



class MatchOptions(usage.Options):
    synopsis = "WORD..."

    optParameters = [
        ["database", "d", "*", "The database to search."],
        ["strategy", "S", ".",
         "The matching strategy, or . for the server default."],
    ]

    def parseArgs(self, *words):
        if not words:
            raise usage.UsageError("A word to match is required.")
        self["word"] = " ".join(words)



class DatabasesOptions(usage.Options):
    synopsis = ""



class StrategiesOptions(usage.Options):
    synopsis = ""



class Options(usage.Options):
    """
    Command line options for C{txdict}.
    """

    synopsis = "Usage: txdict [OPTIONS] COMMAND [COMMAND OPTIONS]"

    optFlags = [
        ["verbose", "v", "Log protocol activity to stderr."],
    ]

    optParameters = [
        ["server", "s", "dict.org", "The DICT server to query."],
        ["port", "p", DEFAULT_PORT, "The port of the DICT server.", int],
    ]

    subCommands = [
        ["define", None, DefineOptions, "Show the definitions of a word."],
        ["match", None, MatchOptions, "Show the words matching a word."],
        ["databases", None, DatabasesOptions,
         "List the databases of the server."],
        ["strategies", None, StrategiesOptions,
         "List the matching strategies of the server."],
    ]

    def postOptions(self):
        if self.subCommand is None:
            raise usage.UsageError("A command is required.")



def formatDefinitions(definitions):
    if not definitions:
        return "No definitions found.\n"
    out = []
    for definition in definitions:
        out.append("From %s [%s]:\n\n" % (definition.database.description,
                                         definition.database.name))
        out.append(definition.text.replace("\r\n", "\n"))
        out.append("\n")
    return "".join(out)



def formatMatches(matches):
    if not matches:
        return "No matches found.\n"
    return "".join([m + "\n" for m in matches])



def formatDescriptors(descriptors):
    """
    Format databases or strategies as a two column table.
    """
    if not descriptors:
        return ""
    width = max([len(d.name) for d in descriptors])
    return "".join(["%-*s  %s\n" % (width, d.name, d.description)
                    for d in descriptors])



def lookup(client, options, stdout):
    """
    Run the command chosen in C{options} on C{client} and write its result
    to C{stdout}.

    @rtype: L{twisted.internet.defer.Deferred}
    """
    sub = options.subOptions
    if options.subCommand == "define":
        d = client.define(sub["word"], sub["database"])
        d.addCallback(formatDefinitions)
    elif options.subCommand == "match":
        d = client.match(sub["word"], sub["strategy"], sub["database"])
        d.addCallback(formatMatches)
    elif options.subCommand == "databases":
        d = client.listDatabases().addCallback(formatDescriptors)
    else:
        d = client.listStrategies().addCallback(formatDescriptors)
    d.addCallback(stdout.write)
    return d



def _main(reactor, options):
    def query(client):
        d = lookup(client, options, sys.stdout)

        def closed(ignored, result):
            return result

        d.addBoth(lambda result: client.close().addCallback(closed, result))
        return d

    def failed(reason):
        reason.trap(DictError, ValueError)
        sys.stderr.write("txdict: %s\n" % (reason.getErrorMessage(),))
        raise SystemExit(1)

    d = connect(reactor, options["server"], options["port"])
    d.addCallback(query)
    d.addCallback(lambda ignored: None)
    d.addErrback(failed)
    return d



def parseOptions(argv=None):
    """
    Parse command line options and print the full usage message to stderr
    if there are errors.
    """
    options = Options()
    try:
        options.parseOptions(argv)
    except usage.UsageError as errortext:
        sys.stderr.write(str(options) + "\n")
        sys.stderr.write("ERROR: %s\n" % (errortext,))
        raise SystemExit(1)
    return options



def run(argv=None):
    options = parseOptions(argv)
    if options["verbose"]:
        globalLogBeginner.beginLoggingTo([textFileLogObserver(sys.stderr)])
    task.react(_main, (options,))
