"""Contains exceptions raised when reconciling application configuration."""


class GitHubAuthenticationConfigurationUndefinedError(Exception):
    """Raised when the GitHub authentication configuration is ambiguous or incomplete."""

    pass


class InvalidConfigurationElementError(Exception):
    """Raised when a configuration element has a value outside its allowed range."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        """Initializes the exception with the name and value of the invalid element."""
        super().__init__(f"Invalid configuration element {name}={value!r}: {reason}")
        self.name = name
        self.value = value
        self.reason = reason
