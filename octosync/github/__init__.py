"""GitHub REST access: HTTP transport and repository listing."""

from .http import HttpClient, HttpError, JsonResponse, MockHttpClient, RealHttpClient
from .repos import (
    GitHubRepositoriesService,
    ListOptions,
    RemoteAPIError,
    RepositoriesService,
    RepositoryDescriptor,
    RepositoryListing,
    RepositoryPage,
    get_repos,
    list_repositories,
)

__all__ = [
    "GitHubRepositoriesService",
    "HttpClient",
    "HttpError",
    "JsonResponse",
    "ListOptions",
    "MockHttpClient",
    "RealHttpClient",
    "RemoteAPIError",
    "RepositoriesService",
    "RepositoryDescriptor",
    "RepositoryListing",
    "RepositoryPage",
    "get_repos",
    "list_repositories",
]
