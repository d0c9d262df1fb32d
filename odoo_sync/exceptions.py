class ConfigError(Exception):
    """Raised when required settings (e.g. Odoo credentials) are missing."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InputFileError(Exception):
    """Raised when the stock input file cannot be read or has the wrong shape."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class AuthError(Exception):
    """Raised when authentication against Odoo fails."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class BackendFault(Exception):
    """Raised when an RPC call fails at the transport level or Odoo reports an exception."""
    def __init__(self, message, data=None):
        super().__init__(message)
        self.message = message
        self.data = data
