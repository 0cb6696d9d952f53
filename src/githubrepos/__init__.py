"""GitHub repositories provider.

Tracks a named set of an owner's GitHub repositories and records the id
GitHub reports for each of them:
- configuration resolved from provider config with environment fallbacks
- structured logging with masked credentials
- paginated repository listing merged into local state
"""

__version__ = "0.1.0"

from githubrepos.config import ConnectionConfig, ProviderSettings, ResolvedConfig, resolve
from githubrepos.reconcile import RepoState, reconcile

__all__ = [
    "__version__",
    "ConnectionConfig",
    "ProviderSettings",
    "RepoState",
    "ResolvedConfig",
    "reconcile",
    "resolve",
]
