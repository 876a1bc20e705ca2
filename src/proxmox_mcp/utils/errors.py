"""Exception hierarchy for the Proxmox MCP server."""


class ProxmoxMCPError(Exception):
    """Base error for all Proxmox MCP failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ProxmoxMCPError):
    """Connection configuration cannot produce a usable credential."""

    pass


class AuthenticationError(ProxmoxMCPError):
    """Login against the Proxmox API failed."""

    pass


class ValidationError(ProxmoxMCPError):
    """A required argument is missing, empty or of the wrong type."""

    pass


class UpstreamError(ProxmoxMCPError):
    """The Proxmox API returned an error or could not be reached."""

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"Failed to {operation}: {detail}")
