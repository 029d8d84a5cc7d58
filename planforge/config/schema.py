# planforge/config/schema.py
"""
Pydantic configuration models for planforge.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AnthropicConfig(BaseModel):
    """Remote reasoning service configuration."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="Anthropic API key (None = local heuristics only)",
    )
    model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model used for research, ADR and clarification calls",
    )
    max_tokens_research: int = Field(
        default=4000, ge=1, le=64000, description="Token limit for the research call"
    )
    max_tokens_adrs: int = Field(
        default=8000, ge=1, le=64000, description="Token limit for the ADR call"
    )
    max_tokens_clarification: int = Field(
        default=1000, ge=1, le=64000, description="Token limit for clarification questions"
    )
    timeout: float = Field(
        default=120.0,
        gt=0,
        description="Per-request timeout in seconds; expiry counts as a remote failure",
    )
    max_retries: int = Field(
        default=3, ge=1, le=10, description="Attempts for transient remote errors"
    )


class ResearchConfig(BaseModel):
    """Research stage policy."""

    model_config = ConfigDict(extra="ignore")

    fallback_to_local: bool = Field(
        default=False,
        description="Degrade to local heuristics when the remote call fails (default: abort)",
    )


class AdrConfig(BaseModel):
    """ADR stage policy."""

    model_config = ConfigDict(extra="ignore")

    fallback_to_local: bool = Field(
        default=True,
        description="Degrade to templated local ADRs when the remote call fails",
    )


class OutputConfig(BaseModel):
    """Output and file path configuration."""

    model_config = ConfigDict(extra="ignore")

    plans_dir: str = Field(
        default=".planforge/plans",
        description="Directory for generated build specs (relative to cwd)",
    )
    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )


class QualityConfig(BaseModel):
    """Quality gate thresholds."""

    model_config = ConfigDict(extra="ignore")

    min_score: int = Field(
        default=80, ge=0, le=100, description="Minimum overall score to pass the gate"
    )
    max_vague_terms: int = Field(
        default=10,
        ge=1,
        description="Gate fails once this many vague-term occurrences are found",
    )


class PlannerConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="ignore")

    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    research: ResearchConfig = Field(default_factory=ResearchConfig)
    adrs: AdrConfig = Field(default_factory=AdrConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
