"""Exception hierarchy shared by the aoc-kit core and its front-ends."""

from __future__ import annotations


class AocKitError(RuntimeError):
    """Base class for every failure the tool reports to the user."""


# ----------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------
class ConfigError(AocKitError):
    pass


class ConfigTypeMismatch(ConfigError):
    def __init__(self, key: str, value: object) -> None:
        super().__init__(f"Invalid value of property '{key}': {value!r}")
        self.key = key
        self.value = value


class UnknownFlag(ConfigError):
    def __init__(self, flag: str) -> None:
        super().__init__(f"Unknown flag '{flag}'")
        self.flag = flag


class InvalidFlagValue(ConfigError):
    def __init__(self, flag: str, value: object) -> None:
        super().__init__(f"Invalid argument value for flag '{flag}': {value!r}")
        self.flag = flag
        self.value = value


class InvalidConfig(ConfigError):
    pass


# ----------------------------------------------------------------------
# Filesystem
# ----------------------------------------------------------------------
class StorageError(AocKitError):
    pass


class PersistenceError(StorageError):
    pass


class CustomInputNotFound(StorageError):
    pass


class ReadError(StorageError):
    pass


# ----------------------------------------------------------------------
# Credentials
# ----------------------------------------------------------------------
class AuthError(AocKitError):
    pass


class InvalidCredential(AuthError):
    pass


class CredentialRejected(AuthError):
    pass


class NotLoggedIn(AuthError):
    def __init__(self, message: str = "You don't seem to be logged in") -> None:
        super().__init__(message)


# ----------------------------------------------------------------------
# Network / protocol
# ----------------------------------------------------------------------
class NetworkError(AocKitError):
    pass


class ProtocolError(AocKitError):
    pass


class ExampleNotFound(ProtocolError):
    pass


# ----------------------------------------------------------------------
# Solution module contract
# ----------------------------------------------------------------------
class ModuleContractError(AocKitError):
    pass


class ModuleNotFound(ModuleContractError):
    pass


class ModuleLoadError(ModuleContractError):
    pass


class InvalidModuleExport(ModuleContractError):
    pass


class SolverExecutionError(ModuleContractError):
    pass


class InvalidAnswerType(ModuleContractError):
    pass


class DuplicateSolve(ModuleContractError):
    pass


class NoAnswerProduced(ModuleContractError):
    pass
