class SinkError(RuntimeError):
    """A notification sink answered with something other than success."""


class SinkNotConfigured(SinkError):
    """The sink's URL or credentials are missing from the server config."""
