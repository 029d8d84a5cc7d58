# tests/unit/test_quality.py
"""Unit tests for the build-spec quality validator."""

import pytest

from planforge.planning.quality import QualityValidator, split_sections, validate
from planforge.planning.quality.validator import section_score

FILLER = " ".join(["component"] * 210)


def _document(skip=(), extra_lines=()):
    """Eighteen long sections with a code block and no vague language."""
    lines = ["# Demo - Complete Build Specification", ""]
    for number in range(1, 19):
        if number in skip:
            continue
        lines += [f"## {number}. Section {number}", "", FILLER, ""]
    lines += ["```text", "npm run build", "```", *extra_lines]
    return "\n".join(lines)


DECISIONS = "project: Demo\ndecisions: []\n"


class TestSectionScoring:
    @pytest.mark.parametrize(
        "words,expected", [(201, 100), (150, 80), (101, 80), (51, 60), (50, 40), (0, 40)]
    )
    def test_word_buckets(self, words, expected):
        assert section_score(" ".join(["w"] * words)) == expected

    def test_missing_section_scores_zero(self):
        assert section_score(None) == 0

    def test_split_sections_first_occurrence_wins(self):
        doc = "## 1. A\nfirst\n### 2. Not a section\n## 1. Again\nsecond\n## 3. C\n"
        sections = split_sections(doc)
        assert sorted(sections) == [1, 3]
        assert "first" in sections[1]
        assert "second" not in sections[1]


class TestOverallScore:
    def test_half_up_rounding(self):
        assert QualityValidator.overall_score({"a": 80, "b": 81}, 0, 0) == 81

    def test_penalties_are_capped(self):
        scores = {f"section{i}": 100 for i in range(1, 19)}
        assert QualityValidator.overall_score(scores, 25, 10) == 50

    def test_floor_at_zero(self):
        assert QualityValidator.overall_score({"a": 0}, 5, 1) == 0


class TestValidate:
    def test_complete_document_passes(self):
        report = validate(_document(), DECISIONS)
        assert report.overall_score == 100
        assert report.passed_quality_gate
        assert report.errors == []
        assert report.warnings == []
        assert report.suggestions == []
        assert set(report.section_scores) == {f"section{i}" for i in range(1, 19)}

    def test_nine_vague_lines_pass(self):
        report = validate(_document(extra_lines=["We might add this."] * 9), DECISIONS)
        assert len(report.vague_terms_found) == 9
        assert report.overall_score == 91
        assert report.passed_quality_gate

    def test_ten_vague_terms_fail_gate(self):
        report = validate(_document(extra_lines=["We might add this."] * 10), DECISIONS)
        assert report.overall_score == 90
        assert not report.passed_quality_gate
        assert "Remove or clarify 10 vague terms" in report.required_fixes

    def test_missing_required_section_is_critical(self):
        report = validate(_document(skip=(2,)), DECISIONS)
        assert not report.passed_quality_gate
        assert [e.severity for e in report.errors] == ["critical"]
        assert report.missing_details[0].section == "2. Non-Negotiables"
        assert report.section_scores["section2"] == 0
        # (17 * 100) / 18 - 5
        assert report.overall_score == 89
        assert report.required_fixes == ["Fix 1 validation error(s)"]

    def test_missing_optional_section_is_not_an_error(self):
        report = validate(_document(skip=(15,)), DECISIONS)
        assert report.errors == []
        assert report.passed_quality_gate

    def test_custom_thresholds(self):
        validator = QualityValidator(min_score=95, max_vague_terms=3)
        report = validator.validate(_document(extra_lines=["Maybe later."] * 3), DECISIONS)
        assert not report.passed_quality_gate


class TestVagueTerms:
    def test_one_finding_per_term_per_line(self):
        findings = QualityValidator().find_vague_terms("Some items might work\nsome more")
        assert [(f.term, f.location) for f in findings] == [
            ("might", "Line 1"),
            ("some", "Line 1"),
            ("some", "Line 2"),
        ]

    def test_case_insensitive_and_suggestion(self):
        findings = QualityValidator().find_vague_terms("Owner: tbd")
        assert findings[0].term == "TBD"
        assert findings[0].suggestion == "Provide specific information"

    def test_default_suggestion(self):
        findings = QualityValidator().find_vague_terms("Supports numerous formats")
        assert findings[0].suggestion == "Be more specific"

    def test_word_boundaries(self):
        assert QualityValidator().find_vague_terms("A roundabout fetch handsome") == []


class TestWarnings:
    def test_placeholder_warning(self):
        report = validate(_document(extra_lines=["Owner: Not specified"]), DECISIONS)
        assert any(w.field == "completeness" for w in report.warnings)

    def test_short_document_and_sections(self):
        report = validate("## 1. Executive Summary\nShort.\n", DECISIONS)
        messages = [w.message for w in report.warnings]
        assert "Section 1 is empty or minimal" in messages
        assert any("10,000 characters" in m for m in messages)
        assert report.suggestions[0].message == "Add code examples or API definitions"

    def test_several_short_sections_plural(self):
        document = "## 1. Executive Summary\nShort.\n\n## 2. Goals\nAlso short.\n"
        messages = [w.message for w in validate(document, DECISIONS).warnings]
        assert "Sections 1, 2 are empty or minimal" in messages


class TestDecisionsFile:
    def test_absent_is_warning(self):
        report = validate(_document(), None)
        assert report.errors == []
        assert report.warnings[0].section == "Decisions"
        assert report.passed_quality_gate

    def test_blank_is_warning(self):
        report = validate(_document(), "   \n")
        assert report.warnings[0].section == "Decisions"

    def test_invalid_yaml_is_critical(self):
        report = validate(_document(), "key: [unclosed")
        assert report.errors[0].severity == "critical"
        assert not report.passed_quality_gate

    def test_non_mapping_is_major(self):
        report = validate(_document(), "- a\n- b\n")
        assert report.errors[0].severity == "major"
        assert report.overall_score == 95
        assert report.passed_quality_gate
