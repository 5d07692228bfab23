# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

__version__ = "1.0.0"
