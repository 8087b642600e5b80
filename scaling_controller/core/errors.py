# scaling_controller/core/errors.py

# -----------------------------
# Base Errors
# -----------------------------

class ControllerError(Exception):
    """Base class for all scaling controller errors."""
    pass


# -----------------------------
# Startup Errors
# -----------------------------

class ControllerStartupError(ControllerError):
    """Fatal initialization failure; the process must not start its loop."""
    pass


# -----------------------------
# Store Errors
# -----------------------------

class StoreReadError(ControllerError):
    """Snapshot could not be read from the store."""
    pass


# -----------------------------
# Dispatch Errors
# -----------------------------

class DispatchError(ControllerError):
    pass


class DeployEncodingError(DispatchError):
    """Deploy command could not be encoded or decoded."""
    pass


class PublishError(DispatchError):
    """Transport refused or failed to publish a message."""
    pass
