# tests/unit/test_adrs.py
"""Unit tests for local, remote and dual-mode ADR generation."""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from planforge.errors import MalformedResponseError, RemoteReasoningError
from planforge.planning.adr import (
    AdrGenerator,
    LocalAdrGenerator,
    architecture_alternatives,
    build_adr_prompt,
    parse_adr_response,
)
from planforge.planning.adr.local import auth_decision, deployment_decision
from planforge.planning.schemas import (
    ArchitectureChoice,
    ClarificationQA,
    Feature,
    InputEnrichment,
    NfrSecurity,
    ProjectSummary,
)

TODAY = date(2026, 3, 1)


def _entry(title):
    return {
        "title": title,
        "context": f"Context for {title}",
        "decision": f"Decide {title}",
        "consequences": ["First", "Second", "Third"],
        "alternatives": [{"name": "Option A"}, {"name": "Option B"}],
    }


def _client(response=None, error=None):
    client = MagicMock()
    client.generate = AsyncMock(return_value=response, side_effect=error)
    return client


class TestLocalAdrs:
    def test_taskapp_emits_all_eight(self, task_summary, task_research):
        adrs = LocalAdrGenerator().generate(task_summary, task_research, today=TODAY)
        assert [a.title for a in adrs] == [
            "Technology Stack Selection",
            "Architecture Pattern: Monolithic",
            "Authentication Strategy",
            "Database Schema Design",
            "API Design Approach",
            "Frontend State Management",
            "Deployment Strategy",
            "Testing Strategy",
        ]
        assert [a.id for a in adrs] == list(range(1, 9))
        assert all(a.date_created == TODAY for a in adrs)

    def test_low_complexity_without_auth(self, research_factory):
        research = research_factory(
            [Feature(name="Landing page", priority="high", complexity="low", estimated_hours=8)],
            complexity="low",
        )
        summary = ProjectSummary(project_name="Site", features=["Landing page"])
        adrs = LocalAdrGenerator().generate(summary, research, today=TODAY)
        titles = [a.title for a in adrs]
        assert "Authentication Strategy" not in titles
        assert "Frontend State Management" not in titles
        assert len(adrs) == 6
        assert [a.id for a in adrs] == list(range(1, 7))

    def test_every_adr_has_bounded_lists(self, task_summary, task_research):
        for adr in LocalAdrGenerator().generate(task_summary, task_research):
            assert 3 <= len(adr.consequences) <= 5
            assert 2 <= len(adr.alternatives) <= 3

    def test_clarification_answer_reaches_context(self, task_summary, task_research):
        answers = [
            ClarificationQA(question="What level of authentication is required?", answer="Google SSO"),
            ClarificationQA(question="What is your expected scale?", skipped=True),
        ]
        adrs = LocalAdrGenerator().generate(task_summary, task_research, clarifications=answers)
        auth = next(a for a in adrs if a.title == "Authentication Strategy")
        assert "Stakeholder input: Google SSO" in auth.context
        deployment = next(a for a in adrs if a.title == "Deployment Strategy")
        assert "Stakeholder input" not in deployment.context

    def test_user_architecture_preference(self, task_summary, task_research):
        enrichment = InputEnrichment(architecture_style="modular monolith")
        adrs = LocalAdrGenerator().generate(task_summary, task_research, enrichment)
        assert "(user preference: modular monolith)" in adrs[1].decision

    def test_microservices_architecture_record(self, task_summary, task_research):
        research = task_research.model_copy(
            update={
                "architecture": ArchitectureChoice(
                    pattern="Microservices", reasoning="Independent teams and scaling"
                )
            }
        )
        adrs = LocalAdrGenerator().generate(task_summary, research, today=TODAY)
        architecture = adrs[1]
        assert architecture.title == "Architecture Pattern: Microservices"
        assert (
            "Distributed system challenges (eventual consistency, partial failures)"
            in architecture.consequences
        )
        assert "Microservices" not in [a.name for a in architecture.alternatives]


class TestLocalDecisions:
    def test_architecture_alternatives_exclude_choice(self):
        names = [a.name for a in architecture_alternatives("Microservices")]
        assert names == ["Monolithic", "Serverless", "Modular Monolith"]

    def test_auth_decision_default(self):
        assert "JWT" in auth_decision(None)

    def test_auth_decision_two_factor(self):
        enrichment = InputEnrichment(
            nfr_security=NfrSecurity(authentication_method="two-factor", encryption_at_rest=True)
        )
        decision = auth_decision(enrichment)
        assert "TOTP-based 2FA" in decision
        assert "encrypted credentials" in decision

    def test_deployment_by_tier_and_budget(self):
        assert "Railway/Render" in deployment_decision(None)
        assert "AWS" in deployment_decision(InputEnrichment(scalability_tier="enterprise"))
        assert "AWS" in deployment_decision(InputEnrichment(budget_constraint="high"))
        assert "DigitalOcean" in deployment_decision(InputEnrichment(scalability_tier="medium"))


class TestParseAdrResponse:
    def test_renumbers_sequentially(self):
        entries = [{**_entry(f"Decision {i}"), "id": 40 + i} for i in range(6)]
        adrs = parse_adr_response(json.dumps(entries), TODAY)
        assert [a.id for a in adrs] == [1, 2, 3, 4, 5, 6]
        assert all(a.status == "accepted" for a in adrs)

    def test_truncates_to_eight(self):
        adrs = parse_adr_response(json.dumps([_entry(f"D{i}") for i in range(11)]), TODAY)
        assert len(adrs) == 8
        assert adrs[-1].title == "D7"

    def test_wrapped_object(self):
        raw = json.dumps({"adrs": [_entry(f"D{i}") for i in range(5)]})
        assert len(parse_adr_response(raw, TODAY)) == 5

    def test_braced_prose_before_array(self):
        raw = "ADRs for {TaskApp}:\n" + json.dumps([_entry(f"D{i}") for i in range(5)])
        adrs = parse_adr_response(raw, TODAY)
        assert [a.title for a in adrs] == ["D0", "D1", "D2", "D3", "D4"]

    def test_trims_long_lists(self):
        entry = {
            **_entry("Long"),
            "consequences": ["a", "b", "c", "d", "e", "f", "g"],
            "alternatives": [{"name": n} for n in "wxyz"],
        }
        adrs = parse_adr_response(json.dumps([entry] * 5), TODAY)
        assert len(adrs[0].consequences) == 5
        assert len(adrs[0].alternatives) == 3

    def test_too_few(self):
        with pytest.raises(MalformedResponseError, match="at least 5"):
            parse_adr_response(json.dumps([_entry("Only")] * 4), TODAY)

    def test_not_an_array(self):
        with pytest.raises(MalformedResponseError):
            parse_adr_response('{"title": "single"}', TODAY)

    def test_invalid_entry(self):
        entries = [_entry(f"D{i}") for i in range(5)]
        entries[2]["consequences"] = ["just one"]
        with pytest.raises(MalformedResponseError, match="ADR 3"):
            parse_adr_response(json.dumps(entries), TODAY)

    def test_prompt_carries_clarifications(self, task_summary, task_research):
        answers = [ClarificationQA(question="Budget?", answer="low")]
        prompt = build_adr_prompt(task_summary, task_research, clarifications=answers)
        assert "CLARIFICATION Q&A" in prompt
        assert "TaskApp" in prompt


class TestAdrGenerator:
    @pytest.mark.asyncio
    async def test_remote_success(self, task_summary, task_research):
        raw = json.dumps([_entry(f"D{i}") for i in range(5)])
        generator = AdrGenerator(_client(response=raw))
        adrs = await generator.generate_adrs(task_summary, task_research, today=TODAY)
        assert generator.last_mode == "remote"
        assert [a.title for a in adrs] == ["D0", "D1", "D2", "D3", "D4"]

    @pytest.mark.asyncio
    async def test_remote_failure_degrades(self, task_summary, task_research):
        generator = AdrGenerator(_client(error=RemoteReasoningError("timeout")))
        adrs = await generator.generate_adrs(task_summary, task_research, today=TODAY)
        assert generator.last_mode == "local"
        assert adrs[0].title == "Technology Stack Selection"

    @pytest.mark.asyncio
    async def test_malformed_response_degrades(self, task_summary, task_research):
        generator = AdrGenerator(_client(response="[]"))
        adrs = await generator.generate_adrs(task_summary, task_research, today=TODAY)
        assert generator.last_mode == "local"
        assert 5 <= len(adrs) <= 8

    @pytest.mark.asyncio
    async def test_local_without_client(self, task_summary, task_research):
        generator = AdrGenerator()
        await generator.generate_adrs(task_summary, task_research)
        assert generator.last_mode == "local"
