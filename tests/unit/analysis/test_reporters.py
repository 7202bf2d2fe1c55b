"""Unit tests for the table, JSON and CSV reporters."""

import io

import orjson
import pytest
from rich.console import Console

from rust_arch_metrics.analysis.reporters import (
    ConsoleReporter,
    OutputFormat,
    generate_report,
    parse_metrics,
    render_csv,
    render_json,
    render_table,
)
from rust_arch_metrics.analysis.reporters.console import EMPTY_MESSAGE
from rust_arch_metrics.config.thresholds import MetricThresholds
from rust_arch_metrics.core.models import AnalysisResult


@pytest.fixture
def results():
    return [
        AnalysisResult(type_name="Point", lcom=1.0, cbo=0, wmc=3),
        AnalysisResult(type_name="Wrapper", lcom=0.0, cbo=1, wmc=0),
    ]


class TestOutputFormat:
    """Test format name parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("table", OutputFormat.TABLE),
            ("JSON", OutputFormat.JSON),
            (" csv ", OutputFormat.CSV),
        ],
    )
    def test_parse(self, value, expected):
        assert OutputFormat.parse(value) is expected

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format: xml"):
            OutputFormat.parse("xml")


class TestParseMetrics:
    """Test metric selection parsing."""

    def test_all(self):
        assert parse_metrics("all") == ("lcom", "cbo", "wmc")

    def test_subset_keeps_canonical_order(self):
        assert parse_metrics("wmc, LCOM") == ("lcom", "wmc")

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            parse_metrics("lcom,dit")

    def test_empty_selection(self):
        with pytest.raises(ValueError, match="No metrics selected"):
            parse_metrics(" , ")


class TestJsonReporter:
    """Test JSON rendering."""

    def test_array_of_objects(self, results):
        data = orjson.loads(render_json(results))

        assert data == [
            {"struct_name": "Point", "lcom": 1.0, "cbo": 0, "wmc": 3},
            {"struct_name": "Wrapper", "lcom": 0.0, "cbo": 1, "wmc": 0},
        ]

    def test_selected_metrics_only(self, results):
        data = orjson.loads(render_json(results, ("cbo",)))

        assert data[0] == {"struct_name": "Point", "cbo": 0}

    def test_empty_results(self):
        assert orjson.loads(render_json([])) == []


class TestCsvReporter:
    """Test CSV rendering."""

    def test_header_and_rows(self, results):
        lines = render_csv(results).splitlines()

        assert lines[0] == "struct_name,lcom,cbo,wmc"
        assert lines[1] == "Point,1.0,0,3"
        assert lines[2] == "Wrapper,0.0,1,0"

    def test_selected_metrics_only(self, results):
        lines = render_csv(results, ("lcom", "wmc")).splitlines()

        assert lines[0] == "struct_name,lcom,wmc"
        assert lines[1] == "Point,1.0,3"

    def test_empty_results_header_only(self):
        assert render_csv([]) == "struct_name,lcom,cbo,wmc\n"


class TestConsoleReporter:
    """Test table rendering."""

    def test_render_table_contains_values(self, results):
        text = render_table(results)

        assert "Struct Name" in text
        assert "LCOM" in text
        assert "Point" in text
        assert "1.000" in text
        assert "Metric Explanations" in text

    def test_render_table_selected_columns(self, results):
        text = render_table(results, ("cbo",))

        assert "CBO" in text
        assert "WMC" not in text
        assert "LCOM" not in text

    def test_empty_results_message(self):
        assert EMPTY_MESSAGE in render_table([])

    def test_threshold_highlighting(self):
        console = Console(file=io.StringIO(), force_terminal=True, width=100)
        reporter = ConsoleReporter(
            console=console, thresholds=MetricThresholds(wmc_warning=10)
        )
        table = reporter.build_table(
            [AnalysisResult(type_name="God", lcom=0.1, cbo=0, wmc=42)]
        )

        cells = list(table.columns[3].cells)
        assert cells == ["[red]42[/red]"]
        assert list(table.columns[1].cells) == ["0.100"]

    def test_print_warnings(self):
        console = Console(file=io.StringIO(), record=True, width=200, color_system=None)
        ConsoleReporter(console=console).print_warnings(
            ["Skipped broken.rs: syntax error near line 3"]
        )

        text = console.export_text()
        assert "1 warning(s)" in text
        assert "broken.rs" in text


class TestGenerateReport:
    """Test format dispatch."""

    def test_dispatch(self, results):
        assert generate_report(results, OutputFormat.CSV).startswith("struct_name,")
        assert orjson.loads(generate_report(results, OutputFormat.JSON))[0][
            "struct_name"
        ] == "Point"
        assert "Point" in generate_report(results, OutputFormat.TABLE)
