# -*- test-case-name: txdict.test.test_atoms -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tokenizing and quoting of DICT (RFC 2229) parameters.

A reply line is a sequence of parameters separated by spaces.  Each
parameter is either an I{atom}, a run of non-space characters, or a
I{dqstring}, a run of arbitrary characters enclosed in double quotes.  In
both forms a backslash escapes the character that follows it.
"""

# Characters which may not appear in an atom sent to the server.
_NON_ATOM = frozenset([chr(i) for i in range(33)] + ['"', "'", "\\"])



def parseParam(line):
    """
    Chew one dqstring or atom from the beginning of C{line}.

    @type line: C{str}

    @rtype: C{tuple} of (C{str} or L{None}, C{str})
    @return: The parameter and the remaining line.  The parameter is L{None}
        when C{line} holds no more parameters, or when a dqstring or escape
        sequence is not terminated; in the latter case the line is returned
        unchanged.
    """
    line = line.lstrip(" \t")
    if not line:
        return (None, "")
    quoted = line[0] == '"'
    res = []
    i = 1 if quoted else 0
    while i < len(line):
        c = line[i]
        i += 1
        if c == "\\":
            if i == len(line):
                return (None, line)
            res.append(line[i])
            i += 1
        elif quoted and c == '"':
            return ("".join(res), line[i:].lstrip(" \t"))
        elif not quoted and c in " \t":
            return ("".join(res), line[i:].lstrip(" \t"))
        else:
            res.append(c)
    if quoted:
        return (None, line)
    return ("".join(res), "")



def splitAtoms(line):
    """
    Split a reply line into its parameters, treating each dqstring as a
    single parameter with its quotes removed.

    @type line: C{str}

    @rtype: C{list} of C{str}

    @raise ValueError: If the line ends inside a dqstring or an escape
        sequence.
    """
    atoms = []
    rest = line
    while True:
        (param, rest) = parseParam(rest)
        if param is None:
            break
        atoms.append(param)
    if rest:
        raise ValueError("Unterminated parameter in %r" % (line,))
    return atoms



def splitFields(line, count):
    """
    Split C{count} leading parameters off C{line} and return them followed by
    the rest of the line as one final field.

    Descriptive text at the end of a reply line is sent quoted by some
    servers and bare by others; when the rest of the line is exactly one
    dqstring it is unquoted, otherwise it is returned as it appears.

    @type line: C{str}
    @type count: C{int}

    @rtype: C{list} of C{str}
    @return: A list of C{count + 1} fields.  The last one is empty when the
        line has no text after the leading parameters.

    @raise ValueError: If the line has fewer than C{count} parameters.
    """
    fields = []
    rest = line
    for _ in range(count):
        (param, rest) = parseParam(rest)
        if param is None:
            raise ValueError(
                "Expected %d parameters in %r" % (count, line))
        fields.append(param)
    rest = rest.strip()
    if rest.startswith('"'):
        (param, remainder) = parseParam(rest)
        if param is not None and not remainder:
            rest = param
    fields.append(rest)
    return fields



def quote(word):
    """
    Make a dqstring out of C{word}, escaping embedded quotes and backslashes.

    @type word: C{str}
    @rtype: C{str}
    """
    return '"%s"' % (word.replace("\\", "\\\\").replace('"', '\\"'),)



def checkAtom(token):
    """
    Make sure C{token} can be sent to the server as an atom.

    @type token: C{str}
    @rtype: C{str}
    @return: C{token}, unchanged.

    @raise ValueError: If C{token} is empty or contains spaces, control
        characters, quotes or backslashes.
    """
    if not token or any(c in _NON_ATOM for c in token):
        raise ValueError("%r is not a valid DICT atom" % (token,))
    return token



__all__ = ["parseParam", "splitAtoms", "splitFields", "quote", "checkAtom"]
