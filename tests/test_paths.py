from jenkins_mcp.utils.paths import job_location, job_path_from_fullname, job_url, join_base


def test_job_url_without_branch():
    assert job_url("http://j", "team", "api") == "http://j/job/team/job/api"


def test_job_url_encodes_branch_slashes_and_spaces():
    assert job_url("http://j/", "team", "api", "feature/new ui") == "http://j/job/team/job/api/job/feature%2Fnew%20ui"


def test_job_url_is_deterministic():
    assert job_url("http://j", "a", "b", "c") == job_url("http://j", "a", "b", "c")


def test_job_location():
    assert job_location("team", "api") == "team/api"
    assert job_location("team", "api", "main") == "team/api/main"


def test_job_path_from_fullname_encodes_each_part():
    assert job_path_from_fullname("My Project/WebApp/feature/x") == "/job/My%20Project/job/WebApp/job/feature/job/x"


def test_job_path_from_fullname_drops_empty_parts():
    assert job_path_from_fullname("/a//b/") == "/job/a/job/b"


def test_join_base():
    assert join_base("http://j", "/job/a/api/json") == "http://j/job/a/api/json"
    assert join_base("http://j", "http://j/job/a") == "http://j/job/a"
