from pathlib import Path

import pytest

from valtemplate.cli.parsers import parse_request, split_values
from valtemplate.core.errors import UsageError


class TestParseRequest:
    def test_template_file(self) -> None:
        request = parse_request(["deploy.j2"], from_stdin=False)

        assert request.template_path == Path("deploy.j2")
        assert request.from_stdin is False

    def test_stdin_mode(self) -> None:
        request = parse_request([], from_stdin=True)

        assert request.template_path is None
        assert request.from_stdin is True

    def test_rejects_file_with_stdin(self) -> None:
        with pytest.raises(UsageError, match="cannot be combined with --stdin"):
            parse_request(["deploy.j2"], from_stdin=True)

    def test_rejects_no_input(self) -> None:
        with pytest.raises(UsageError, match="must provide one template file"):
            parse_request([], from_stdin=False)

    def test_rejects_several_files(self) -> None:
        with pytest.raises(UsageError, match="only one template file"):
            parse_request(["a.j2", "b.j2"], from_stdin=False)


class TestSplitValues:
    def test_splits_commas_across_repeated_flags(self) -> None:
        assert split_values(["a.yaml,b.yaml", "c.yaml"]) == [
            Path("a.yaml"),
            Path("b.yaml"),
            Path("c.yaml"),
        ]

    def test_drops_empty_entries(self) -> None:
        assert split_values(["a.yaml,", " ,b.yaml"]) == [Path("a.yaml"), Path("b.yaml")]
