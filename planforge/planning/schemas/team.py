# planforge/planning/schemas/team.py
"""Schema for the agent team composition."""

from pydantic import Field

from .base import PlannerModel
from .research import Priority


class AgentDefinition(PlannerModel):
    name: str
    role: str
    responsibilities: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    workload_percentage: int = Field(..., ge=0, le=100)
    priority: Priority
    estimated_hours: float = Field(..., ge=0)


class AgentTeam(PlannerModel):
    """Agents plus derived totals; build with from_agents to keep totals consistent."""

    agents: list[AgentDefinition]
    total_agents: int
    estimated_total_hours: float
    recommended_sequence: list[str]

    @classmethod
    def from_agents(cls, agents: list[AgentDefinition], sequence: list[str]) -> "AgentTeam":
        return cls(
            agents=agents,
            total_agents=len(agents),
            estimated_total_hours=sum(a.estimated_hours for a in agents),
            recommended_sequence=sequence,
        )

    def get(self, name: str) -> AgentDefinition | None:
        return next((a for a in self.agents if a.name == name), None)
