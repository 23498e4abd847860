"""Unit tests for ContentsClient."""

import base64
from unittest.mock import MagicMock

import httpx
import pytest

from orgbadges.github import ContentsClient, RepositoryFile, TransportError, UnexpectedResponseError


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock HTTP client."""
    return MagicMock()


@pytest.fixture
def contents(mock_client: MagicMock) -> ContentsClient:
    """Create a ContentsClient with mocked HTTP client."""
    client = ContentsClient(repository="my-org/.github", token="test-token")
    client._client = mock_client
    return client


def _response(status_code: int, payload: object = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


def _file_payload(content: bytes, sha: str = "sha-1", path: str = "profile/README.md") -> dict:
    encoded = base64.b64encode(content).decode("ascii")
    # The API wraps base64 content at 60 characters
    wrapped = "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))
    return {"type": "file", "path": path, "sha": sha, "content": wrapped}


@pytest.mark.unit
class TestGetFile:
    """Tests for get_file."""

    def test_returns_decoded_file(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """Content decoded, SHA kept."""
        text = b"# Hello\n" * 20
        mock_client.get.return_value = _response(200, _file_payload(text, "abc"))

        result = contents.get_file("profile/README.md")

        assert result == RepositoryFile(path="profile/README.md", content=text, sha="abc")
        assert result.text.startswith("# Hello")

    def test_requests_contents_path(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """GET /repos/{repo}/contents/{path}."""
        mock_client.get.return_value = _response(200, _file_payload(b"x"))

        contents.get_file("/profile/README.md")

        mock_client.get.assert_called_once_with(
            "/repos/my-org/.github/contents/profile/README.md", params=None
        )

    def test_branch_sent_as_ref(self, mock_client: MagicMock) -> None:
        """Configured branch is passed as ref."""
        client = ContentsClient("my-org/.github", "t", branch="badges")
        client._client = mock_client
        mock_client.get.return_value = _response(200, _file_payload(b"x"))

        client.get_file("README.md")

        assert mock_client.get.call_args.kwargs["params"] == {"ref": "badges"}

    def test_not_found_returns_none(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """404 is not an error."""
        mock_client.get.return_value = _response(404, {"message": "Not Found"})

        assert contents.get_file("missing.md") is None

    def test_other_status_raises(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """Anything else raises TransportError."""
        mock_client.get.return_value = _response(403, text="Resource not accessible")

        with pytest.raises(TransportError) as exc_info:
            contents.get_file("README.md")

        assert "403" in str(exc_info.value)

    def test_directory_rejected(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """A directory listing is not a file."""
        mock_client.get.return_value = _response(200, [{"type": "file"}])

        with pytest.raises(UnexpectedResponseError):
            contents.get_file("profile")

    def test_network_error_wrapped(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """httpx errors become TransportError."""
        mock_client.get.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(TransportError):
            contents.get_file("README.md")


@pytest.mark.unit
class TestPutFile:
    """Tests for put_file."""

    def test_update_sends_sha(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """Payload carries base64 content and prior SHA."""
        mock_client.put.return_value = _response(200, {"content": {"sha": "new-sha"}})

        new_sha = contents.put_file("README.md", "hello", "Update README", sha="old-sha")

        assert new_sha == "new-sha"
        mock_client.put.assert_called_once_with(
            "/repos/my-org/.github/contents/README.md",
            json={
                "message": "Update README",
                "content": base64.b64encode(b"hello").decode("ascii"),
                "sha": "old-sha",
            },
        )

    def test_create_without_sha(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """New files are created without a SHA."""
        mock_client.put.return_value = _response(201, {"content": {"sha": "created"}})

        contents.put_file("badges/a.svg", b"<svg/>", "Add badge")

        assert "sha" not in mock_client.put.call_args.kwargs["json"]

    def test_conflict_raises(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """Stale SHA (409) raises TransportError."""
        mock_client.put.return_value = _response(409, text="is at abc but expected def")

        with pytest.raises(TransportError) as exc_info:
            contents.put_file("README.md", "x", "msg", sha="def")

        assert "409" in str(exc_info.value)


@pytest.mark.unit
class TestSyncFile:
    """Tests for sync_file."""

    def test_identical_content_not_written(
        self, contents: ContentsClient, mock_client: MagicMock
    ) -> None:
        """No commit when the file is current."""
        mock_client.get.return_value = _response(200, _file_payload(b"<svg/>", path="b.svg"))

        assert contents.sync_file("b.svg", "<svg/>", "msg") is False
        mock_client.put.assert_not_called()

    def test_changed_content_written_with_sha(
        self, contents: ContentsClient, mock_client: MagicMock
    ) -> None:
        """Changed files are updated against the read SHA."""
        mock_client.get.return_value = _response(200, _file_payload(b"<svg>old</svg>", "s1", "b.svg"))
        mock_client.put.return_value = _response(200, {"content": {"sha": "s2"}})

        assert contents.sync_file("b.svg", "<svg>new</svg>", "msg") is True
        assert mock_client.put.call_args.kwargs["json"]["sha"] == "s1"

    def test_missing_file_created(self, contents: ContentsClient, mock_client: MagicMock) -> None:
        """Absent files are created."""
        mock_client.get.return_value = _response(404)
        mock_client.put.return_value = _response(201, {"content": {"sha": "s1"}})

        assert contents.sync_file("b.svg", "<svg/>", "msg") is True
        assert "sha" not in mock_client.put.call_args.kwargs["json"]
