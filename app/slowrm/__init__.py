"""slowrm - Remove directory trees without flooding the disk with I/O.

Large files are unlinked first and then truncated in chunks with pauses
in between; runs of small files are throttled by a byte counter.
"""

__version__ = "0.1.0"
