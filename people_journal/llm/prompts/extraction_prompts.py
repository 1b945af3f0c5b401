"""
Extraction Prompts - Turn a 1:1 transcript into a structured entry draft.
"""

# Fixed tag vocabulary offered to the model
TAGS = [
    "career growth", "blockers", "wins", "feedback given", "feedback received",
    "cross-team", "technical debt", "hiring", "process", "personal", "morale",
    "autonomy", "project update", "conflict", "learning",
]


def build_extraction_prompt(member_name: str, transcript: str) -> str:
    """
    Get the extraction prompt for a transcript.

    Args:
        member_name: Display name of the report in the transcript
        transcript: Raw meeting transcript

    Returns:
        Prompt asking for a bare JSON object
    """
    return f"""You are helping an engineering manager process a 1:1 meeting transcript with their report named {member_name}. Extract structured information and respond ONLY with a JSON object (no markdown, no backticks, no preamble). The JSON should have these fields:

{{
  "summary": "2-4 sentence summary of the key discussion points",
  "tags": ["array of relevant tags from this list: {', '.join(TAGS)}"],
  "action_items_mine": ["action items for the manager"],
  "action_items_theirs": ["action items for {member_name}"],
  "morale_score": <1-5 integer, your best read on their energy/morale based on tone>,
  "morale_rationale": "1-2 sentence explanation of why you gave this morale score, citing specific things from the conversation",
  "growth_score": <1-5 integer, signals of professional growth or stagnation>,
  "growth_rationale": "1-2 sentence explanation of why you gave this growth score, citing specific things from the conversation",
  "notable_quotes": ["1-2 notable or important things {member_name} said, verbatim if possible"],
  "blockers": ["any blockers or frustrations mentioned"],
  "wins": ["any wins, accomplishments, or positive things mentioned"]
}}

Here is the transcript:

{transcript}"""
