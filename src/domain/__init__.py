"""Domain types for the quote bot.

Commands as typed by users and the error taxonomy of a lookup. They carry no
I/O so that parsing and error handling can be tested without the network.
"""

__all__ = [
    "command",
    "errors",
]
