# planforge/planning/quality/validator.py
"""
Quality validator for assembled build specs.

Scores each numbered section by word count, finds vague language line by
line, checks the companion decisions YAML, and applies the quality gate.
"""

import logging
import math
import re

import yaml

from planforge.planning.schemas import (
    MissingDetail,
    QualityReport,
    VagueTermFinding,
    ValidationIssue,
    ValidationNote,
)

logger = logging.getLogger(__name__)

SECTION_COUNT = 18
MIN_DOCUMENT_CHARS = 10_000
MAX_VAGUE_PENALTY = 20
ERROR_PENALTY = 5
MAX_ERROR_PENALTY = 30
SHORT_SECTION_WORDS = 50

VAGUE_TERMS = (
    "TBD",
    "TODO",
    "FIXME",
    "maybe",
    "might",
    "could",
    "should probably",
    "nice to have",
    "if possible",
    "when time permits",
    "tentative",
    "approximately",
    "roughly",
    "about",
    "around",
    "some",
    "various",
    "several",
    "many",
    "few",
    "multiple",
    "numerous",
    "etc",
)

VAGUE_SUGGESTIONS = {
    "tbd": "Provide specific information",
    "todo": "Complete this item or remove it",
    "maybe": "Make a definitive decision",
    "might": "Be explicit about the requirement",
    "could": "Specify if it will or will not be included",
    "approximately": "Provide exact numbers",
    "roughly": "Provide exact numbers",
    "some": "Specify the exact number or list",
    "various": "List the specific items",
    "etc": "Complete the list explicitly",
}
DEFAULT_SUGGESTION = "Be more specific"

REQUIRED_SECTIONS = (
    (1, "1. Executive Summary"),
    (2, "2. Non-Negotiables"),
    (7, "7. Functional Requirements"),
    (8, "8. Non-Functional Requirements"),
    (10, "10. System Architecture"),
)

PLACEHOLDERS = ("Not specified", "Not defined")

# (exclusive lower bound on word count, score), checked in order
WORD_COUNT_BUCKETS = ((200, 100), (100, 80), (50, 60))
MIN_SECTION_SCORE = 40

_SECTION_HEADING = re.compile(r"^## (\d+)\. ", re.MULTILINE)
_VAGUE_PATTERNS = {
    term: re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in VAGUE_TERMS
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def split_sections(document: str) -> dict[int, str]:
    """Map section number to its text, heading included; first occurrence wins."""
    headings = list(_SECTION_HEADING.finditer(document))
    sections: dict[int, str] = {}
    for index, match in enumerate(headings):
        number = int(match.group(1))
        end = headings[index + 1].start() if index + 1 < len(headings) else len(document)
        sections.setdefault(number, document[match.start():end])
    return sections


def section_score(text: str | None) -> int:
    if text is None:
        return 0
    words = len(text.split())
    for threshold, score in WORD_COUNT_BUCKETS:
        if words > threshold:
            return score
    return MIN_SECTION_SCORE


class QualityValidator:
    """
    Scores build-spec documents and applies the quality gate.

    The gate passes when the overall score reaches ``min_score``, there are
    no critical errors, and fewer than ``max_vague_terms`` vague-term
    occurrences were found.
    """

    def __init__(self, min_score: int = 80, max_vague_terms: int = 10):
        self.min_score = min_score
        self.max_vague_terms = max_vague_terms

    def validate(self, document: str, decisions: str | None = None) -> QualityReport:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationNote] = []
        suggestions: list[ValidationNote] = []
        missing: list[MissingDetail] = []

        sections = split_sections(document)
        section_scores = {
            f"section{i}": section_score(sections.get(i)) for i in range(1, SECTION_COUNT + 1)
        }
        vague = self.find_vague_terms(document)

        self._check_required_sections(sections, errors, missing)
        self._check_common_issues(document, sections, warnings, suggestions)
        self._check_decisions(decisions, errors, warnings)

        overall = self.overall_score(section_scores, len(vague), len(errors))
        critical = [e for e in errors if e.severity == "critical"]
        passed = (
            overall >= self.min_score
            and not critical
            and len(vague) < self.max_vague_terms
        )

        report = QualityReport(
            overall_score=overall,
            section_scores=section_scores,
            errors=errors,
            warnings=warnings,
            suggestions=suggestions,
            vague_terms_found=vague,
            missing_details=missing,
            passed_quality_gate=passed,
            required_fixes=self._required_fixes(errors, vague),
        )
        logger.info(
            f"Quality report: score={overall}, vague={len(vague)}, "
            f"errors={len(errors)}, passed={passed}"
        )
        return report

    def find_vague_terms(self, document: str) -> list[VagueTermFinding]:
        """One finding per vague term per line it appears on."""
        lines = document.split("\n")
        findings = []
        for term, pattern in _VAGUE_PATTERNS.items():
            for line_number, line in enumerate(lines, start=1):
                if pattern.search(line):
                    findings.append(
                        VagueTermFinding(
                            term=term,
                            location=f"Line {line_number}",
                            suggestion=VAGUE_SUGGESTIONS.get(term.lower(), DEFAULT_SUGGESTION),
                        )
                    )
        return findings

    @staticmethod
    def overall_score(section_scores: dict[str, int], vague_count: int, error_count: int) -> int:
        scores = list(section_scores.values())
        average = sum(scores) / len(scores) if scores else 0
        penalty = min(vague_count, MAX_VAGUE_PENALTY) + min(
            error_count * ERROR_PENALTY, MAX_ERROR_PENALTY
        )
        return max(0, _round_half_up(average - penalty))

    def _check_required_sections(
        self,
        sections: dict[int, str],
        errors: list[ValidationIssue],
        missing: list[MissingDetail],
    ) -> None:
        for number, title in REQUIRED_SECTIONS:
            if number in sections:
                continue
            missing.append(MissingDetail(section=title, what_is_missing="Entire section is missing"))
            errors.append(
                ValidationIssue(
                    section=title,
                    field="section",
                    message=f"Required section '{title}' is missing",
                    severity="critical",
                )
            )

    def _check_common_issues(
        self,
        document: str,
        sections: dict[int, str],
        warnings: list[ValidationNote],
        suggestions: list[ValidationNote],
    ) -> None:
        if any(p in document for p in PLACEHOLDERS):
            warnings.append(
                ValidationNote(
                    section="General",
                    field="completeness",
                    message='Contains "Not specified" or "Not defined" placeholders',
                )
            )

        short = sorted(n for n, text in sections.items() if len(text.split()) <= SHORT_SECTION_WORDS)
        if short:
            numbers = ", ".join(str(n) for n in short)
            warnings.append(
                ValidationNote(
                    section="General",
                    field="sections",
                    message=(
                        f"Section {numbers} is empty or minimal"
                        if len(short) == 1
                        else f"Sections {numbers} are empty or minimal"
                    ),
                )
            )

        if len(document) < MIN_DOCUMENT_CHARS:
            warnings.append(
                ValidationNote(
                    section="General",
                    field="length",
                    message="Specification is shorter than recommended (< 10,000 characters)",
                )
            )

        if "```" not in document:
            suggestions.append(
                ValidationNote(
                    section="General",
                    field="formatting",
                    message="Add code examples or API definitions",
                )
            )

    def _check_decisions(
        self,
        decisions: str | None,
        errors: list[ValidationIssue],
        warnings: list[ValidationNote],
    ) -> None:
        if decisions is None or not decisions.strip():
            warnings.append(
                ValidationNote(
                    section="Decisions",
                    field="file",
                    message="No decisions file was provided",
                )
            )
            return

        try:
            data = yaml.safe_load(decisions)
        except yaml.YAMLError as e:
            errors.append(
                ValidationIssue(
                    section="Decisions",
                    field="yaml",
                    message=f"Decisions file is not valid YAML: {e}",
                    severity="critical",
                )
            )
            return

        if not isinstance(data, dict):
            errors.append(
                ValidationIssue(
                    section="Decisions",
                    field="yaml",
                    message="Decisions file must be a YAML mapping",
                    severity="major",
                )
            )

    def _required_fixes(
        self, errors: list[ValidationIssue], vague: list[VagueTermFinding]
    ) -> list[str]:
        fixes = []
        if errors:
            fixes.append(f"Fix {len(errors)} validation error(s)")
        if len(vague) >= self.max_vague_terms:
            fixes.append(f"Remove or clarify {len(vague)} vague terms")
        return fixes


def validate(
    document: str,
    decisions: str | None = None,
    min_score: int = 80,
    max_vague_terms: int = 10,
) -> QualityReport:
    """Score ``document`` with the default gate thresholds."""
    return QualityValidator(min_score, max_vague_terms).validate(document, decisions)
