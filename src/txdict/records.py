# -*- test-case-name: txdict.test.test_records -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Value types produced by the DICT client.
"""

import attr



@attr.s(frozen=True)
class Database:
    """
    A dictionary database offered by a DICT server.

    @ivar name: The identity token used to name the database in commands,
        for example C{"wn"}.
    @type name: C{str}

    @ivar description: A human readable description.
    @type description: C{str}
    """
    name = attr.ib()
    description = attr.ib(default="")

    def __str__(self):
        return self.name



@attr.s(frozen=True)
class MatchingStrategy:
    """
    A strategy a DICT server can use to match words, for example C{"exact"}
    or C{"prefix"}.

    Strategies compare and hash by name only.

    @ivar name: The identity token used to name the strategy in commands.
    @type name: C{str}

    @ivar description: A human readable description.
    @type description: C{str}
    """
    name = attr.ib()
    description = attr.ib(default="", eq=False)

    def __str__(self):
        return self.name



@attr.s(frozen=True)
class Definition:
    """
    One definition of a word, as returned by a C{DEFINE} command.

    @ivar word: The word that was looked up.
    @type word: C{str}

    @ivar database: The database the definition came from.
    @type database: L{Database}

    @ivar text: The body of the definition, each line followed by
        C{"\\r\\n"}.
    @type text: C{str}
    """
    word = attr.ib()
    database = attr.ib()
    text = attr.ib(default="")



ALL_DATABASES = Database("*", "All databases")
FIRST_MATCH = Database("!", "First database with a match")
DEFAULT_STRATEGY = MatchingStrategy(".", "Server default")



def nameOf(thing):
    """
    Return the identity token of a L{Database} or L{MatchingStrategy}, or
    C{thing} itself if it is already a token.
    """
    if isinstance(thing, (Database, MatchingStrategy)):
        return thing.name
    return thing



__all__ = [
    "Database", "MatchingStrategy", "Definition",
    "ALL_DATABASES", "FIRST_MATCH", "DEFAULT_STRATEGY",
]
