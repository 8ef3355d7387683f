class AccretionError(Exception):
    """
    Broken invariant or impossible geometry inside the accretion engine.

    Not recoverable locally: generation of the current system is abandoned.
    """

    pass


class ConfigError(ValueError):
    """Invalid generation parameters."""

    pass
