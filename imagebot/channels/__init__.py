"""
Chat gateway abstraction.

The message handler only sees ``InboundMessage`` and its reply target, so it
can be exercised without a live Discord connection.
"""
