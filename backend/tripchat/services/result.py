"""Provider result type: every external lookup returns Ok or Err instead of raising."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"            # lookup returned zero results
    PROVIDER_ERROR = "provider_error"  # transport, HTTP status, timeout, malformed body
    FATAL = "fatal"                    # aggregate cannot be built


@dataclass(frozen=True)
class ProviderError:
    kind: ErrorKind
    message: str
    provider: str = ""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ProviderError

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Ok[T], Err]


def not_found(provider: str, message: str) -> Err:
    return Err(ProviderError(ErrorKind.NOT_FOUND, message, provider))


def provider_error(provider: str, message: str) -> Err:
    return Err(ProviderError(ErrorKind.PROVIDER_ERROR, message, provider))


def fatal(message: str) -> Err:
    return Err(ProviderError(ErrorKind.FATAL, message))
