"""Error taxonomy for provider configuration and repository reads."""

from __future__ import annotations


class GitHubReposError(Exception):
    """Base exception for all githubrepos errors."""


class Diagnostic(GitHubReposError):
    """A user-facing problem, optionally scoped to a configuration attribute."""

    def __init__(self, summary: str, detail: str, attribute: str | None = None) -> None:
        self.summary = summary
        self.detail = detail
        self.attribute = attribute
        super().__init__(f"{summary}: {detail}")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(summary={self.summary!r}, attribute={self.attribute!r})"
        )


class UnknownValueError(Diagnostic):
    """A configuration value is not known yet and cannot be defaulted."""


class MissingValueError(Diagnostic):
    """A required configuration value is empty after defaulting."""


class ClientConstructionError(Diagnostic):
    """The GitHub client could not be built from the resolved configuration."""


class RepositoryReadError(Diagnostic):
    """A lifecycle operation failed to read the owner's repositories."""


class ConfigurationError(GitHubReposError):
    """Raised when configuration produced one or more diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        if not diagnostics:
            raise ValueError("ConfigurationError requires at least one diagnostic")
        self.diagnostics = list(diagnostics)
        super().__init__("; ".join(d.summary for d in self.diagnostics))


class FetchError(GitHubReposError):
    """Raised when a page of the repository listing could not be fetched.

    The message is the underlying error's message, unmodified, so remote-side
    causes (expired tokens, rate limits) stay visible to operators.
    """

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(str(cause))
