"""Prompt template for the startup idea analysis call."""


def build_analysis_prompt(idea: str) -> str:
    return (
        "Act as a startup business analyst. Analyze this startup idea and "
        "respond with ONLY a JSON object:\n\n"
        f'IDEA: "{idea}"\n\n'
        "JSON Response Format:\n"
        "{\n"
        '  "feasibilityScore": <number 0-100 based on market viability>,\n'
        '  "targetAudience": "<specific demographics and pain points>",\n'
        '  "competitors": ["<real competitor 1>", "<real competitor 2>", "<indirect competitor>"],\n'
        '  "monetizationStrategies": ["<revenue model 1>", "<revenue model 2>", "<revenue model 3>"],\n'
        '  "suggestedTechStack": ["<frontend tech>", "<backend tech>", "<database>", "<cloud platform>"]\n'
        "}\n\n"
        "Requirements:\n"
        "- Feasibility score: Consider market size, competition, technical difficulty, "
        "and business model viability\n"
        "- Target audience: Be specific about demographics, income, location, and pain points\n"
        "- Competitors: Name actual companies, not generic descriptions\n"
        "- Monetization: Suggest 3 different revenue models\n"
        "- Tech stack: Modern, scalable technologies appropriate for this business\n\n"
        "JSON only:"
    )
