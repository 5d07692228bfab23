# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Interfaces for the DICT client.
"""

from zope.interface import Attribute, Interface



class IDictClient(Interface):
    """
    A connection to a DICT (RFC 2229) server.

    Every query returns a L{twisted.internet.defer.Deferred}.  Queries made
    while another one is in flight are queued and sent in order.
    """

    greeting = Attribute(
        "The text of the server's 220 greeting, without the code.")

    def define(word, database):
        """
        Look up the definitions of C{word}.

        @param word: The word to define.
        @type word: C{str}

        @param database: The database to search: a
            L{txdict.records.Database} or its name.  C{"*"} searches every
            database and C{"!"} stops at the first one with a match.

        @return: A L{Deferred} firing with a C{list} of
            L{txdict.records.Definition}, empty when nothing matched.
        """


    def match(word, strategy, database):
        """
        Look up words matching C{word} according to C{strategy}.

        @return: A L{Deferred} firing with a C{list} of the matched words in
            the order the server sent them, without duplicates.
        """


    def listDatabases():
        """
        Retrieve the databases offered by the server.  The list is fetched
        once per connection and remembered.

        @return: A L{Deferred} firing with a C{list} of
            L{txdict.records.Database}.
        """


    def listStrategies():
        """
        Retrieve the matching strategies supported by the server.

        @return: A L{Deferred} firing with a C{list} of
            L{txdict.records.MatchingStrategy}.
        """


    def close():
        """
        Say goodbye to the server and drop the connection, ignoring any
        error.

        @return: A L{Deferred} firing with L{None}.
        """
