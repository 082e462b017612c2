"""Invalid ``params`` on an otherwise well-formed JSON-RPC request."""


class InvalidParamsError(Exception):
    """Raised by method handlers when ``params`` is unusable."""


__all__ = ["InvalidParamsError"]
