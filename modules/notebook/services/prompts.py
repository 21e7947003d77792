"""
Prompt templates for the text-generation API.
"""

SUMMARY_PROMPT = """Summarize the following note in 3 to 6 bullet points.

Requirements:
- Each bullet point captures one key idea
- Keep it short and clear
- Write in the language of the note
- Start every bullet point with "-"
- Return only the summary, with no other explanation

Note:
{content}

Summary:"""

TAGS_PROMPT = """Generate at most {max_tags} tags most relevant to the following note.

Requirements:
- Separate tags with commas
- Write in the language of the note
- Return only the tags, with no other explanation
- Each tag is 2 to 8 characters long

Note:
{content}

Tags:"""


def summary_prompt(content: str) -> str:
    return SUMMARY_PROMPT.format(content=content)


def tags_prompt(content: str, max_tags: int = 5) -> str:
    return TAGS_PROMPT.format(content=content, max_tags=max_tags)


def parse_tags(answer: str, max_tags: int = 5) -> list[str]:
    """Split a comma-separated answer into at most max_tags raw tags."""
    tags = [tag.strip() for tag in answer.split(",")]
    return [tag for tag in tags if tag][:max_tags]
