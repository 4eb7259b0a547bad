"""
Report formats and formatters.
"""

import csv
import io
import json

import pytest

from kinship.core.exceptions import OutputError, UnknownFormatError
from kinship.reporting import (
    CsvFormatter,
    HtmlFormatter,
    JsonFormatter,
    ReportFormat,
    TextFormatter,
    get_formatter,
)

SOURCE = """
class Post
  belongs_to :author, class_name: "User"
  has_many :comments
end

class Comment
  belongs_to :post
end
"""


@pytest.fixture
def graph(build_graph):
    return build_graph(SOURCE)


class TestReportFormat:
    @pytest.mark.parametrize(
        "value, formatter_type",
        [
            ("text", TextFormatter),
            ("JSON", JsonFormatter),
            ("csv", CsvFormatter),
            (ReportFormat.HTML, HtmlFormatter),
        ],
    )
    def test_get_formatter(self, value, formatter_type):
        assert isinstance(get_formatter(value), formatter_type)

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError) as info:
            ReportFormat.parse("yaml")
        assert info.value.suggestions == ["Use one of: text, json, csv, html"]


def test_json(graph):
    data = json.loads(JsonFormatter().render(graph))
    assert data["nodes"][0] == {
        "name": "Post",
        "kind": "class",
        "edges": ["User", "Comment"],
        "meta": [
            {"reference": "author", "class_name": "User"},
            {"reference": "comments"},
        ],
    }


def test_csv(graph):
    rows = list(csv.reader(io.StringIO(CsvFormatter().render(graph))))
    assert rows == [
        ["source", "target", "kind", "dangling"],
        ["Post", "User", "class", "true"],
        ["Post", "Comment", "class", "false"],
        ["Comment", "Post", "class", "false"],
    ]


def test_text(graph):
    rendered = TextFormatter().render(graph)
    assert "Post (class)" in rendered
    assert "User [dangling]" in rendered
    assert rendered.rstrip().endswith("2 nodes, 3 edges, 1 dangling targets")


def test_html(graph):
    rendered = HtmlFormatter().render(graph)
    assert "<td>Post</td><td>class</td>" in rendered
    assert '<span class="dangling">User</span>' in rendered
    assert "reference: author, class_name: User" in rendered
    assert '<script type="application/json" id="graph-data">{"nodes": [' in rendered


def test_write_creates_parent_directories(tmp_path):
    path = JsonFormatter().write("{}\n", tmp_path / "a" / "b" / "graph.json")
    assert path.read_text(encoding="utf-8") == "{}\n"


def test_write_failure_raises_output_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(OutputError):
        JsonFormatter().write("{}", blocker / "graph.json")
