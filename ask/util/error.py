"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings describe a setup the application cannot run with."""

    pass


class DependencyInjectionError(UtilError):
    """A provider component has no implementation of the requested kind."""

    def __init__(self, component: str, kind: str):
        self.component = component
        self.kind = kind
        super().__init__(f"No {kind} implementation for {component}")
