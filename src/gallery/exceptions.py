class RegistryUnavailableError(Exception):
    """The artifact registry could not be reached or answered with something other than JSON."""
