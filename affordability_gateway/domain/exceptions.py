"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BankProviderError(DomainException):
    """Bank data provider call failed"""

    pass


class InvalidCredentialsError(BankProviderError):
    """One-time code or provider credentials were rejected"""

    pass


class AccountNotFoundError(BankProviderError):
    """Provider does not know the requested account"""

    pass


class ProviderUnavailableError(BankProviderError):
    """Provider timed out, errored, or could not be reached"""

    pass


class ProviderConfigurationError(BankProviderError):
    """Provider secret key is missing from configuration"""

    pass
