"""Process exit codes.

One value per failure class so wrapper scripts can tell a missing filter
apart from a rate-limited API or an empty candidate list. The numbers are
part of the command-line contract and must not be renumbered.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for ``gfw-tags``.

    - 0: Success (also used when the user quits the interactive prompt)
    - 1: Missing or invalid argument, unreadable config
    - 2: Releases or versions file could not be fetched
    - 3: Versions file has no usable ``mingw-w64-x86_64-git`` line
    - 4: No SDK commit could be resolved
    - 5: No release matched the filter
    - 6: No matching release has a usable versions file
    - 7: Interactive selection was not a number or out of range
    - 8: Output file could not be written
    """

    OK = 0
    USAGE_ERROR = 1
    FETCH_ERROR = 2
    VERSION_LINE_ERROR = 3
    SDK_COMMIT_ERROR = 4
    NO_RELEASE = 5
    NO_CANDIDATES = 6
    INVALID_SELECTION = 7
    IO_ERROR = 8

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
