"""MCP Prompts — pre-built interaction templates for reproductive health journeys."""

from __future__ import annotations

from fastmcp import FastMCP


def register_reproductive_prompts(mcp: FastMCP) -> None:
    """Register reproductive health MCP prompts."""

    @mcp.prompt()
    def cycle_review_prompt(time_period: str = "the last three cycles") -> str:
        """Prompt template for reviewing menstrual cycle patterns."""
        return f"""I'd like a review of my menstrual cycles over {time_period}. Please:

1. Summarize my cycle length, flow and pain patterns
2. Point out anything irregular or worth discussing with a doctor
3. Link my stress, sleep and exercise to how my cycles have been
4. Tell me when to expect my next period and fertile window

Please use the generate_insights tool with the 'cycle' domain."""

    @mcp.prompt()
    def fertility_planning_prompt(goal: str = "ttc") -> str:
        """Prompt template for fertility tracking guidance toward a goal (ttc, nfp, health)."""
        return f"""I'm tracking my fertility with the goal '{goal}'. I'd like to:

1. Understand where I am in my cycle right now
2. Know my fertile window and best timing for my goal
3. Interpret my BBT, cervical mucus and ovulation test readings
4. Get specific, gentle reminders for the coming days

Please use the generate_insights tool with the 'fertility' domain."""

    @mcp.prompt()
    def life_stage_check_in_prompt(domain: str = "pregnancy") -> str:
        """Prompt template for a check-in on any non-fertility domain (e.g. menopause, hormonal)."""
        return f"""Let's do a {domain.replace('_', ' ')} check-in. Please:

1. Give me a quick overview of my latest entry
2. Flag anything that needs medical attention
3. Share personalized tips for this stage
4. Remind me of upcoming screenings or milestones

Please use the generate_insights tool with the '{domain}' domain. Be honest but encouraging."""
