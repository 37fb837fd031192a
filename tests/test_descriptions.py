from jenkins_mcp import descriptions


def test_every_tool_has_a_description():
    for tool_id in descriptions.TOOL_DESCRIPTIONS:
        assert descriptions.tool_description(tool_id)


def test_list_description_is_joined_with_blank_lines():
    text = descriptions.tool_description(descriptions.GET_JOB_INFO)
    assert text.startswith("Get detailed information about a specific Jenkins job.\n\nThis provides")


def test_tailored_text_is_appended(monkeypatch):
    monkeypatch.setitem(
        descriptions.TAILORED_DESCRIPTIONS,
        descriptions.SEARCH_JOBS,
        ["Jobs live under the 'platform' folder.", "Branch jobs are named after the branch."],
    )

    text = descriptions.tool_description(descriptions.SEARCH_JOBS)

    assert text.endswith(
        "paths and types.\n\nJobs live under the 'platform' folder.\n\nBranch jobs are named after the branch."
    )


def test_empty_tailored_text_adds_nothing():
    base = descriptions.join_description(descriptions.TOOL_DESCRIPTIONS[descriptions.SANITY_CHECK])
    assert descriptions.tool_description(descriptions.SANITY_CHECK) == base
