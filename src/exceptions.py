class HiddenMessageError(Exception):
    """Base exception for the hidden message scanner"""


class BlockFetchError(HiddenMessageError):
    """Raised when a block cannot be retrieved from the explorer"""


class InvalidTransactionIndexError(HiddenMessageError):
    """Raised when the selected transaction number is not numeric or out of range"""


class ConfigurationError(HiddenMessageError):
    """Raised when an environment setting such as LOG_LEVEL or BLOCK_EXPLORER_TIMEOUT cannot be used"""
