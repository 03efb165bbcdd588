"""Errors raised by the flow engine."""


class MissingOrderContext(Exception):
    """A navigation query ran with no order to anchor on.

    Raised when no order was supplied and none is bound to the config.
    """

    def __init__(self, message: str = "No order context found to run order config."):
        super().__init__(message)
