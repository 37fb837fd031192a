from __future__ import annotations

from typing import Optional
from urllib.parse import quote


def job_location(folder_name: str, repo_name: str, branch_name: Optional[str] = None) -> str:
    """Human-readable ``folder/repo[/branch]`` label."""

    if branch_name:
        return f"{folder_name}/{repo_name}/{branch_name}"
    return f"{folder_name}/{repo_name}"


def job_url(base_url: str, folder_name: str, repo_name: str, branch_name: Optional[str] = None) -> str:
    """Build the URL of a multibranch job.

    Folder and repository names are used as given; branch names are fully
    percent-encoded so ``feature/x`` becomes ``feature%2Fx``::

        job_url("http://j", "team", "api", "feature/x")
        -> "http://j/job/team/job/api/job/feature%2Fx"
    """

    url = f"{base_url.rstrip('/')}/job/{folder_name}/job/{repo_name}"
    if branch_name:
        url = f"{url}/job/{quote(branch_name, safe='')}"
    return url


def job_path_from_fullname(fullname: str) -> str:
    """Turn ``a/b c/d`` into ``/job/a/job/b%20c/job/d``."""

    parts = [quote(part, safe="") for part in fullname.split("/")]
    parts = [p for p in parts if p]
    return "/job/" + "/job/".join(parts)


def join_base(base_url: str, url: str) -> str:
    """Prefix ``base_url`` unless ``url`` already points at it."""

    if url.startswith(base_url):
        return url
    return f"{base_url}{url}"
