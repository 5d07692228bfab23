# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

# Make the txdict package executable as the txdict lookup tool.


from txdict.scripts.dictlookup import run

if __name__ == "__main__":
    run()
