"""Fixed table of GitLab resource operations.

Each ``Operation`` binds an HTTP method, a path template and a kind. Single
operations go through ``AsyncGitLabClient.execute`` and return a
``ResponseEnvelope``; paginated ones go through ``AsyncGitLabClient.paginate``.
Path arguments are filled into the ``{}`` placeholders in order and are
URL-encoded, so ``"group/project"`` and file paths are safe to pass as-is.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from urllib.parse import quote


class OperationKind(str, enum.Enum):
    SINGLE = "single"
    PAGINATED = "paginated"


SINGLE = OperationKind.SINGLE
PAGINATED = OperationKind.PAGINATED


@dataclass(frozen=True)
class Operation:
    resource: str
    action: str
    method: str
    path: str
    kind: OperationKind = SINGLE
    # Values for trailing placeholders the caller may omit
    defaults: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return f"{self.resource}.{self.action}"

    @property
    def arity(self) -> int:
        return self.path.count("{}")

    def endpoint(self, *args: object) -> str:
        """Render the path template with URL-encoded *args*."""
        missing = self.arity - len(args)
        if missing < 0 or missing > len(self.defaults):
            raise TypeError(
                f"{self.name} takes {self.arity} path argument(s), got {len(args)}"
            )
        values = list(args)
        if missing:
            values.extend(self.defaults[len(self.defaults) - missing:])
        return self.path.format(*(quote(str(v), safe="") for v in values))


_TABLE: tuple[Operation, ...] = (
    # -- projects --------------------------------------------------------------
    Operation("projects", "all", "GET", "projects", PAGINATED),
    Operation("projects", "show", "GET", "projects/{}"),
    Operation("projects", "create", "POST", "projects"),
    Operation("projects", "update", "PUT", "projects/{}"),
    Operation("projects", "remove", "DELETE", "projects/{}"),
    Operation("projects", "fork", "POST", "projects/{}/fork"),
    Operation("projects", "search", "GET", "projects?search={}", PAGINATED),
    # -- repository ------------------------------------------------------------
    Operation("repositories", "tree", "GET", "projects/{}/repository/tree", PAGINATED),
    Operation(
        "repositories",
        "get_file",
        "GET",
        "projects/{}/repository/files/{}/raw?ref={}",
        defaults=("main",),
    ),
    Operation("repositories", "create_file", "POST", "projects/{}/repository/files/{}"),
    Operation("repositories", "update_file", "PUT", "projects/{}/repository/files/{}"),
    Operation("repositories", "delete_file", "DELETE", "projects/{}/repository/files/{}"),
    Operation("branches", "all", "GET", "projects/{}/repository/branches", PAGINATED),
    Operation("branches", "show", "GET", "projects/{}/repository/branches/{}"),
    Operation("branches", "create", "POST", "projects/{}/repository/branches"),
    Operation("branches", "delete", "DELETE", "projects/{}/repository/branches/{}"),
    # -- merge requests --------------------------------------------------------
    Operation("merge_requests", "all", "GET", "projects/{}/merge_requests", PAGINATED),
    Operation("merge_requests", "show", "GET", "projects/{}/merge_requests/{}"),
    Operation("merge_requests", "create", "POST", "projects/{}/merge_requests"),
    Operation("merge_requests", "update", "PUT", "projects/{}/merge_requests/{}"),
    Operation("merge_requests", "accept", "PUT", "projects/{}/merge_requests/{}/merge"),
    Operation("merge_requests", "cancel", "PUT", "projects/{}/merge_requests/{}/cancel"),
    # -- users -----------------------------------------------------------------
    Operation("users", "current", "GET", "user"),
    Operation("users", "by_id", "GET", "users/{}"),
    Operation("users", "all", "GET", "users", PAGINATED),
    # -- groups ----------------------------------------------------------------
    Operation("groups", "all", "GET", "groups", PAGINATED),
    Operation("groups", "show", "GET", "groups/{}"),
    Operation("groups", "create", "POST", "groups"),
    Operation("groups", "update", "PUT", "groups/{}"),
    Operation("groups", "delete", "DELETE", "groups/{}"),
    Operation("groups", "projects", "GET", "groups/{}/projects", PAGINATED),
    # -- issues ----------------------------------------------------------------
    Operation("issues", "all", "GET", "projects/{}/issues", PAGINATED),
    Operation("issues", "show", "GET", "projects/{}/issues/{}"),
    Operation("issues", "create", "POST", "projects/{}/issues"),
    Operation("issues", "update", "PUT", "projects/{}/issues/{}"),
    Operation("issues", "delete", "DELETE", "projects/{}/issues/{}"),
    Operation("issue_notes", "all", "GET", "projects/{}/issues/{}/notes", PAGINATED),
    Operation("issue_notes", "create", "POST", "projects/{}/issues/{}/notes"),
    Operation("issue_notes", "update", "PUT", "projects/{}/issues/{}/notes/{}"),
    Operation("issue_notes", "delete", "DELETE", "projects/{}/issues/{}/notes/{}"),
    # -- CI --------------------------------------------------------------------
    Operation("pipelines", "all", "GET", "projects/{}/pipelines", PAGINATED),
    Operation("pipelines", "show", "GET", "projects/{}/pipelines/{}"),
    Operation("pipelines", "create", "POST", "projects/{}/pipelines"),
    Operation("pipelines", "retry", "POST", "projects/{}/pipelines/{}/retry"),
    Operation("pipelines", "cancel", "POST", "projects/{}/pipelines/{}/cancel"),
    Operation("pipelines", "jobs", "GET", "projects/{}/pipelines/{}/jobs", PAGINATED),
    Operation("jobs", "show", "GET", "projects/{}/jobs/{}"),
    Operation("jobs", "artifacts", "GET", "projects/{}/jobs/{}/artifacts"),
    Operation("jobs", "trace", "GET", "projects/{}/jobs/{}/trace"),
    Operation("jobs", "retry", "POST", "projects/{}/jobs/{}/retry"),
    Operation("jobs", "cancel", "POST", "projects/{}/jobs/{}/cancel"),
    # -- commits ---------------------------------------------------------------
    Operation("commits", "all", "GET", "projects/{}/repository/commits", PAGINATED),
    Operation("commits", "show", "GET", "projects/{}/repository/commits/{}"),
    Operation("commits", "diff", "GET", "projects/{}/repository/commits/{}/diff"),
    Operation("commits", "comments", "GET", "projects/{}/repository/commits/{}/comments"),
    # -- project settings ------------------------------------------------------
    Operation("project_variables", "all", "GET", "projects/{}/variables", PAGINATED),
    Operation("project_variables", "show", "GET", "projects/{}/variables/{}"),
    Operation("project_variables", "create", "POST", "projects/{}/variables"),
    Operation("project_variables", "update", "PUT", "projects/{}/variables/{}"),
    Operation("project_variables", "remove", "DELETE", "projects/{}/variables/{}"),
    Operation("deployments", "all", "GET", "projects/{}/deployments", PAGINATED),
    Operation("deployments", "show", "GET", "projects/{}/deployments/{}"),
    Operation("deployments", "create", "POST", "projects/{}/deployments"),
    Operation("deployments", "update", "PUT", "projects/{}/deployments/{}"),
    Operation("deployments", "delete", "DELETE", "projects/{}/deployments/{}"),
    Operation("environments", "all", "GET", "projects/{}/environments", PAGINATED),
    Operation("environments", "show", "GET", "projects/{}/environments/{}"),
    Operation("environments", "create", "POST", "projects/{}/environments"),
    Operation("environments", "update", "PUT", "projects/{}/environments/{}"),
    Operation("environments", "delete", "DELETE", "projects/{}/environments/{}"),
    # -- membership ------------------------------------------------------------
    Operation("project_members", "all", "GET", "projects/{}/members", PAGINATED),
    Operation("project_members", "show", "GET", "projects/{}/members/{}"),
    Operation("project_members", "create", "POST", "projects/{}/members"),
    Operation("project_members", "update", "PUT", "projects/{}/members/{}"),
    Operation("project_members", "delete", "DELETE", "projects/{}/members/{}"),
    Operation("group_members", "all", "GET", "groups/{}/members", PAGINATED),
    Operation("group_members", "show", "GET", "groups/{}/members/{}"),
    Operation("group_members", "create", "POST", "groups/{}/members"),
    Operation("group_members", "update", "PUT", "groups/{}/members/{}"),
    Operation("group_members", "delete", "DELETE", "groups/{}/members/{}"),
    # -- search ----------------------------------------------------------------
    Operation("search", "projects", "GET", "search?scope=projects&search={}", PAGINATED),
    Operation("search", "groups", "GET", "search?scope=groups&search={}", PAGINATED),
    Operation("search", "users", "GET", "search?scope=users&search={}", PAGINATED),
)

OPERATIONS: dict[str, Operation] = {op.name: op for op in _TABLE}


def get_operation(name: str) -> Operation:
    """Look up an operation by ``"resource.action"``; ``KeyError`` if unknown."""
    try:
        return OPERATIONS[name]
    except KeyError:
        raise KeyError(f"Unknown GitLab operation: {name!r}") from None
