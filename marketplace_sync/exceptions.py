"""Exception hierarchy for the sync pipeline."""


class SyncError(Exception):
    """Base exception for all sync errors."""


class ConfigurationError(SyncError):
    """Invalid configuration file or value."""


class RepoNotFoundError(SyncError):
    """Skills repository is neither available locally nor configured remotely."""


class CloneError(SyncError):
    """Cloning the remote skills repository failed."""


class PackagingError(SyncError):
    """Writing a skill archive failed."""
