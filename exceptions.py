class FrontierExhausted(Exception):
    """
    Raised when the search frontier runs dry before the bolt reached the ground.

    Every undiscovered neighbour gets pushed while searching, so this can only
    happen through a logic error. It is never caught by the main loop.
    """


class InvalidConfig(ValueError):
    """Raised when a SimulationConfig describes an impossible grid or range."""
