"""Organization repository listing.

The GitHub API returns an organization's repositories in pages. This module
exposes three levels:

- ``get_repos``: one page, forwarded as-is from the service
- ``RepositoryListing``: a lazy, restartable sequence of pages that follows
  the next-page cursor until the API reports no further page
- ``list_repositories``: the concatenated list, or the first error
"""

from __future__ import annotations

import re
import urllib.parse
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from octosync.core.config import DEFAULT_API_URL, DEFAULT_PER_PAGE
from octosync.core.result import Err, Ok, Result
from octosync.core.structured import as_obj_list, as_str_dict, get_bool, get_str

if TYPE_CHECKING:
    from octosync.github.http import HttpClient, HttpError

__all__ = [
    "GitHubRepositoriesService",
    "ListOptions",
    "RemoteAPIError",
    "RepositoriesService",
    "RepositoryDescriptor",
    "RepositoryListing",
    "RepositoryPage",
    "get_repos",
    "list_repositories",
    "parse_next_page",
]


@dataclass(frozen=True, slots=True)
class RemoteAPIError:
    """Listing an organization failed (auth, missing org, rate limit, network)."""

    org: str
    status: int
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoryDescriptor:
    name: str
    full_name: str | None = None
    clone_url: str | None = None
    ssh_url: str | None = None
    default_branch: str | None = None
    archived: bool = False
    fork: bool = False

    @classmethod
    def from_api(cls, item: object) -> RepositoryDescriptor | None:
        """Build from one element of the REST payload; None if it has no name."""
        data = as_str_dict(item)
        if data is None:
            return None
        name = get_str(data, "name")
        if name is None:
            return None
        return cls(
            name=name,
            full_name=get_str(data, "full_name"),
            clone_url=get_str(data, "clone_url"),
            ssh_url=get_str(data, "ssh_url"),
            default_branch=get_str(data, "default_branch"),
            archived=get_bool(data, "archived"),
            fork=get_bool(data, "fork"),
        )


@dataclass(frozen=True, slots=True)
class ListOptions:
    per_page: int = DEFAULT_PER_PAGE
    page: int = 1


@dataclass(frozen=True, slots=True)
class RepositoryPage:
    """One page of descriptors; ``next_page`` is None on the last page."""

    repositories: tuple[RepositoryDescriptor, ...]
    next_page: int | None = None


class RepositoriesService(Protocol):
    """The remote "list organization repositories" operation."""

    def list_by_org(
        self, org: str, options: ListOptions
    ) -> Result[RepositoryPage, RemoteAPIError]: ...


_LINK_RE = re.compile(r'<([^>]+)>\s*;\s*rel="?([^";,]+)"?')


def parse_next_page(link_header: str | None) -> int | None:
    """Extract the ``page`` parameter of the ``rel="next"`` link.

    Example header:
        <https://api.github.com/organizations/1/repos?page=2>; rel="next",
        <https://api.github.com/organizations/1/repos?page=5>; rel="last"
    """
    if not link_header:
        return None
    for url, rel in _LINK_RE.findall(link_header):
        if "next" not in rel.split():
            continue
        query = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
        values = query.get("page")
        if not values:
            return None
        try:
            return int(values[0])
        except ValueError:
            return None
    return None


def _hint_for_status(status: int) -> str | None:
    match status:
        case 401:
            return "Check that the access token is valid and not expired"
        case 403:
            return "The token may lack the read:org scope, or the rate limit was hit"
        case 404:
            return "Check the organization name (private orgs need a member token)"
        case 0:
            return "Check your network connection"
        case _:
            return None


class GitHubRepositoriesService:
    """``RepositoriesService`` backed by the GitHub REST API."""

    def __init__(self, http: HttpClient, api_url: str = DEFAULT_API_URL) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")

    def url_for(self, org: str, options: ListOptions) -> str:
        query = urllib.parse.urlencode({"per_page": options.per_page, "page": options.page})
        return f"{self._api_url}/orgs/{urllib.parse.quote(org, safe='')}/repos?{query}"

    def list_by_org(
        self, org: str, options: ListOptions
    ) -> Result[RepositoryPage, RemoteAPIError]:
        result = self._http.get_json(self.url_for(org, options))
        if isinstance(result, Err):
            return result.map_err(lambda e: self._wrap(org, e))

        response = result.value
        items = as_obj_list(response.data)
        if items is None:
            return Err(
                RemoteAPIError(
                    org=org,
                    status=0,
                    message=f"Expected a JSON array of repositories from {response.url}",
                )
            )

        repos: list[RepositoryDescriptor] = []
        for item in items:
            repo = RepositoryDescriptor.from_api(item)
            if repo is not None:
                repos.append(repo)

        return Ok(
            RepositoryPage(
                repositories=tuple(repos),
                next_page=parse_next_page(response.header("link")),
            )
        )

    @staticmethod
    def _wrap(org: str, error: HttpError) -> RemoteAPIError:
        return RemoteAPIError(
            org=org,
            status=error.status,
            message=str(error),
            hint=_hint_for_status(error.status),
        )


def get_repos(
    org: str,
    service: RepositoriesService,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    page: int = 1,
) -> Result[RepositoryPage, RemoteAPIError]:
    """Request one page, asking for larger pages than the API default."""
    return service.list_by_org(org, ListOptions(per_page=per_page, page=page))


class RepositoryListing:
    """Lazy sequence of repository pages for one organization.

    Each ``iter()`` starts again from page 1, so a listing can be replayed.
    Iteration ends on the last page, or right after yielding the first
    ``Err``. A cursor that does not move forward also ends iteration, so a
    misbehaving server cannot loop us forever.
    """

    def __init__(
        self,
        org: str,
        service: RepositoriesService,
        *,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self.org = org
        self._service = service
        self._per_page = per_page

    def __iter__(self) -> Iterator[Result[RepositoryPage, RemoteAPIError]]:
        page: int | None = 1
        while page is not None:
            result = get_repos(self.org, self._service, per_page=self._per_page, page=page)
            yield result
            if isinstance(result, Err):
                return
            next_page = result.value.next_page
            if next_page is not None and next_page <= page:
                return
            page = next_page


def list_repositories(
    org: str,
    service: RepositoriesService,
    *,
    per_page: int = DEFAULT_PER_PAGE,
) -> Result[list[RepositoryDescriptor], RemoteAPIError]:
    """Fetch every page and concatenate them in API order.

    A failure on any page fails the whole listing; partial results are
    discarded since the full repository set is the unit of work.
    """
    repos: list[RepositoryDescriptor] = []
    for result in RepositoryListing(org, service, per_page=per_page):
        if isinstance(result, Err):
            return result
        repos.extend(result.value.repositories)
    return Ok(repos)
