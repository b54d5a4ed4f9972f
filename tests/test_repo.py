import pytest

from gh_repo_list.core.errors import DecodingError
from gh_repo_list.core.mocks import MOCK_REPOS
from gh_repo_list.models.repo import Repo, decode_repos


def test_decode_repos_keeps_order(repo_payload):
    assert decode_repos(repo_payload) == MOCK_REPOS


def test_from_dict_minimal_fields():
    repo = Repo.from_dict(
        {
            "id": 42,
            "name": "hello",
            "full_name": "octocat/hello",
            "description": None,
            "stargazers_count": 3,
        }
    )
    assert repo.owner == "octocat"
    assert repo.description is None
    assert repo.html_url is None


def test_from_dict_description_may_be_missing():
    repo = Repo.from_dict(
        {"id": 1, "name": "a", "full_name": "o/a", "stargazers_count": 0}
    )
    assert repo.description is None


@pytest.mark.parametrize(
    "patch",
    [
        {"id": "1"},
        {"id": True},
        {"name": None},
        {"full_name": 7},
        {"description": 5},
        {"stargazers_count": -1},
        {"stargazers_count": 1.5},
    ],
)
def test_from_dict_rejects_wrong_types(patch):
    data = {"id": 1, "name": "a", "full_name": "o/a", "stargazers_count": 0}
    data.update(patch)
    with pytest.raises(DecodingError):
        Repo.from_dict(data)


@pytest.mark.parametrize("missing", ["id", "name", "full_name", "stargazers_count"])
def test_from_dict_rejects_missing_field(missing):
    data = {"id": 1, "name": "a", "full_name": "o/a", "stargazers_count": 0}
    del data[missing]
    with pytest.raises(DecodingError, match=missing):
        Repo.from_dict(data)


def test_decode_repos_requires_array():
    with pytest.raises(DecodingError):
        decode_repos({"message": "Not Found"})
    with pytest.raises(DecodingError):
        decode_repos([1, 2])


def test_repo_is_immutable():
    with pytest.raises(AttributeError):
        MOCK_REPOS[0].name = "changed"
