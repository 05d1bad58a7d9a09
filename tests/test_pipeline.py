"""Tests for the pipeline controller and output bundles."""

import shutil
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from rustitect.config.models import DiagramConfig, RustitectConfig
from rustitect.converter import INCLUDE_DIRECTIVE, ConversionError, PandocConverter
from rustitect.diagram import PlantumlRenderer
from rustitect.extractor import SourceParseError, parse_source
from rustitect.pipeline import BUNDLE_KEYS, OutputBundle, OutputFormat, Pipeline

PERSON = """
/// A person.
struct Person {
    /// Their name.
    name: String,
}

impl Person {
    /// Says hi.
    pub fn introduce(&self) {}
}
"""


# ---------------------------------------------------------------------------
# OutputBundle
# ---------------------------------------------------------------------------


class TestOutputBundle:
    def test_every_format_has_bundle_keys(self):
        assert set(BUNDLE_KEYS) == set(OutputFormat)

    def test_combined_keys_and_order(self):
        bundle = OutputBundle(
            mode=OutputFormat.ASCIIDOC_PLANTUML,
            documents={OutputFormat.PLANTUML: "p", OutputFormat.ASCIIDOC: "a"},
        )
        assert list(bundle.documents) == [OutputFormat.ASCIIDOC, OutputFormat.PLANTUML]
        assert bundle.is_combined

    def test_wrong_keys_rejected(self):
        with pytest.raises(ValidationError):
            OutputBundle(mode=OutputFormat.MARKDOWN, documents={OutputFormat.ASCIIDOC: "a"})

    def test_missing_diagram_rejected(self):
        with pytest.raises(ValidationError):
            OutputBundle(
                mode=OutputFormat.ASCIIDOC_PLANTUML, documents={OutputFormat.ASCIIDOC: "a"}
            )

    def test_single_document_not_combined(self):
        bundle = OutputBundle(mode=OutputFormat.PLANTUML, documents={OutputFormat.PLANTUML: "p"})
        assert not bundle.is_combined


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


class TestPlantumlOnly:
    def test_diagram_only(self):
        bundle = Pipeline().run(PERSON, plantuml_only=True)

        assert bundle.mode is OutputFormat.PLANTUML
        diagram = bundle.documents[OutputFormat.PLANTUML]
        assert diagram.startswith("@startuml") and diagram.endswith("@enduml")
        assert "## " not in diagram

    def test_empty_input(self):
        bundle = Pipeline().run("", plantuml_only=True)
        assert bundle.documents == {OutputFormat.PLANTUML: "@startuml\n\n\n\n@enduml"}

    def test_plantuml_format_without_flag(self):
        bundle = Pipeline().run(PERSON, OutputFormat.PLANTUML)
        assert bundle.mode is OutputFormat.PLANTUML

    def test_pandoc_not_called(self):
        converter = MagicMock(spec=PandocConverter)
        Pipeline(converter=converter).run(PERSON, OutputFormat.ASCIIDOC, plantuml_only=True)
        converter.markdown_to_asciidoc.assert_not_called()

    def test_uses_diagram_config(self):
        config = RustitectConfig(diagram=DiagramConfig(show_methods=False))
        bundle = Pipeline(config).run(PERSON, plantuml_only=True)
        assert "introduce" not in bundle.documents[OutputFormat.PLANTUML]


class TestMarkdownOnly:
    def test_summary_only(self):
        bundle = Pipeline().run(PERSON, markdown_only=True)

        assert bundle.mode is OutputFormat.MARKDOWN
        assert bundle.documents[OutputFormat.MARKDOWN] == "## Person\n\nA person.\n\n"

    def test_overrides_plantuml_format(self):
        bundle = Pipeline().run(PERSON, OutputFormat.PLANTUML, markdown_only=True)
        assert bundle.mode is OutputFormat.MARKDOWN
        assert "@startuml" not in bundle.documents[OutputFormat.MARKDOWN]

    def test_flags_mutually_exclusive(self):
        with pytest.raises(ValueError, match="mutually exclusive"):
            Pipeline().run(PERSON, plantuml_only=True, markdown_only=True)


class TestFullDocument:
    def test_markdown_format(self):
        bundle = Pipeline().run(PERSON, OutputFormat.MARKDOWN)
        markdown = bundle.documents[OutputFormat.MARKDOWN]

        assert markdown.startswith("## Person\n```plantuml\n@startuml")
        assert "### introduce()\nSays hi.\n" in markdown

    def test_asciidoc_format(self, fake_pandoc):
        bundle = Pipeline().run(PERSON, OutputFormat.ASCIIDOC)

        assert list(bundle.documents) == [OutputFormat.ASCIIDOC]
        asciidoc = bundle.documents[OutputFormat.ASCIIDOC]
        assert asciidoc.startswith("== Person\n[plantuml]\n----\n@startuml")
        assert "=== introduce()" in asciidoc
        fake_pandoc.assert_called_once()

    def test_combined_format(self, fake_pandoc):
        bundle = Pipeline().run(PERSON, OutputFormat.ASCIIDOC_PLANTUML)

        assert list(bundle.documents) == [OutputFormat.ASCIIDOC, OutputFormat.PLANTUML]
        document = bundle.documents[OutputFormat.ASCIIDOC]
        assert document.count(INCLUDE_DIRECTIVE) == 1
        assert "@startuml" not in document
        assert 'class "Person" {' in bundle.documents[OutputFormat.PLANTUML]

    def test_combined_diagram_matches_rendered_diagram(self, fake_pandoc):
        bundle = Pipeline().run(PERSON, OutputFormat.ASCIIDOC_PLANTUML)
        expected = PlantumlRenderer().render(parse_source(PERSON))
        assert bundle.documents[OutputFormat.PLANTUML] == expected

    def test_fixture_file(self, fake_pandoc, simple_struct_source):
        asciidoc = Pipeline().run(simple_struct_source).documents[OutputFormat.ASCIIDOC]
        assert " Person" in asciidoc
        assert 'class "Person"' in asciidoc


class TestFailures:
    def test_parse_error_stops_before_conversion(self):
        converter = MagicMock(spec=PandocConverter)
        with pytest.raises(SourceParseError):
            Pipeline(converter=converter).run("class-input-data.")
        converter.markdown_to_asciidoc.assert_not_called()

    def test_conversion_error_propagates(self):
        converter = MagicMock(spec=PandocConverter)
        converter.markdown_to_asciidoc.side_effect = ConversionError("pandoc exited with status 1")
        with pytest.raises(ConversionError):
            Pipeline(converter=converter).run(PERSON, OutputFormat.ASCIIDOC)

    def test_combined_without_diagram_fails(self):
        converter = MagicMock(spec=PandocConverter)
        converter.markdown_to_asciidoc.return_value = "== Person\n"
        with pytest.raises(ConversionError):
            Pipeline(converter=converter).run(PERSON, OutputFormat.ASCIIDOC_PLANTUML)


@pytest.mark.skipif(shutil.which("pandoc") is None, reason="pandoc not installed")
class TestWithPandoc:
    def test_combined_format(self, simple_struct_source):
        bundle = Pipeline().run(simple_struct_source, OutputFormat.ASCIIDOC_PLANTUML)
        assert INCLUDE_DIRECTIVE in bundle.documents[OutputFormat.ASCIIDOC]
        assert bundle.documents[OutputFormat.PLANTUML].startswith("@startuml")
