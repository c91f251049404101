"""MCP Prompts: pre-built interaction templates for life impact journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_health_prompts(mcp: FastMCP) -> None:
    """Register life impact MCP prompts."""

    @mcp.prompt()
    def life_impact_review_prompt(period: str = "day") -> str:
        """Prompt template for reviewing how current habits affect lifespan."""
        return f"""Let's review how my habits are affecting my life expectancy over a {period}. Please:

1. Run the life impact calculation and tell me my net gain or loss
2. Name the metrics helping me most and hurting me most
3. Point out any habit interactions that are amplifying or blunting my results
4. Show my projected life expectancy and how confident the estimate is

Be clear about which findings rest on strong evidence and which are weaker."""

    @mcp.prompt()
    def habit_change_prompt(metric_type: str = "steps") -> str:
        """Prompt template for exploring the payoff of changing one habit."""
        return f"""I want to improve my {metric_type}. Please:

1. Show the impact of my current {metric_type} reading
2. Compare it with two or three realistic target values
3. Cite the research behind the estimate
4. Suggest one small, specific change I can start this week

Keep it practical and encouraging."""
