"""
Page report aggregation tests
"""

import json

from rstaudit.lib.report import pageReport_build, report_toDict
from rstaudit.models.examples import CodeExample, PageAnalysis


def analysis_make():
    return PageAnalysis(
        source_path="/corpus/content/node/source/crud.txt",
        content_dir="node",
        code_examples=[
            CodeExample(type="literalinclude", language="javascript", product="Node.js",
                        is_tested=True, is_testable=True, file_path="/tested/a.js"),
            CodeExample(type="io-code-block", language="javascript", product="Node.js",
                        is_input=True, is_testable=True),
            CodeExample(type="io-code-block", language="json", product="JSON", is_output=True),
            CodeExample(type="code-block", language="shell", product="Shell", is_maybe_testable=True),
            CodeExample(type="code-block", language="undefined", product=""),
        ],
    )


class TestPageReport:
    """Test pageReport_build"""

    def test_totals(self):
        report = pageReport_build(analysis_make())

        assert report.source_path == "/corpus/content/node/source/crud.txt"
        assert report.content_dir == "node"
        assert report.total_examples == 5
        assert report.total_input == 1
        assert report.total_output == 1
        assert report.total_tested == 1
        assert report.total_testable == 2
        assert report.total_maybe_testable == 1

    def test_by_product(self):
        """Examples without a product count as Unknown"""
        report = pageReport_build(analysis_make())

        assert set(report.by_product) == {"Node.js", "JSON", "Shell", "Unknown"}
        node = report.by_product["Node.js"]
        assert (node.total_count, node.input_count, node.tested_count, node.testable_count) == (2, 1, 1, 2)
        assert report.by_product["JSON"].output_count == 1
        assert report.by_product["Shell"].maybe_testable_count == 1

    def test_empty_page(self):
        report = pageReport_build(PageAnalysis(source_path="p", rank=4, error="Cannot read p"))

        assert report.rank == 4
        assert report.total_examples == 0
        assert report.by_product == {}
        assert report.error == "Cannot read p"


class TestReportDict:
    """Test JSON rendering"""

    def test_serializable(self):
        analysis = analysis_make()
        data = report_toDict(pageReport_build(analysis), analysis)

        decoded = json.loads(json.dumps(data))
        assert list(decoded["by_product"]) == ["JSON", "Node.js", "Shell", "Unknown"]
        assert decoded["by_product"]["Node.js"]["testable_count"] == 2
        assert len(decoded["code_examples"]) == 5
        assert decoded["code_examples"][0]["file_path"] == "/tested/a.js"

    def test_without_examples(self):
        data = report_toDict(pageReport_build(analysis_make()))
        assert "code_examples" not in data
