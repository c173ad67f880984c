SYSTEM_PROMPT = (
    "You are an AI assistant that helps analyze project documents and extract key information. "
    "Focus on extracting the most important information and be concise in your responses."
)

SCHEMA_DESCRIPTION = """{
  "projectName": "string (brief project name)",
  "description": "string (1-2 paragraph summary)",
  "phases": [
    {
      "name": "string (phase name)",
      "description": "string (1-2 sentences)"
    }
  ],
  "personas": [
    {
      "name": "string (persona name)",
      "description": "string (1-2 sentences)",
      "goals": ["string (bullet points)"],
      "painPoints": ["string (bullet points)"]
    }
  ],
  "requirements": ["string (key requirements, one per item)"]
}"""

FIRST_SEGMENT_PROMPT = """Analyze the following document and extract key project information.
Be concise and focus on the most important details.

Document content:
{content}

Return the information in JSON format with the following structure:
{schema}

Important: Only return valid JSON. Do not include any other text."""

CONTINUATION_PROMPT = """The following is another section of the same document. Extract any additional information that should be added to the project analysis.

Additional content:
{content}

Return only a JSON object with any new or updated information in the same format as before:
{schema}

Important: Only return valid JSON. Do not include any other text."""


def build_extraction_prompt(content: str, is_first_segment: bool) -> str:
    template = FIRST_SEGMENT_PROMPT if is_first_segment else CONTINUATION_PROMPT
    return template.format(content=content, schema=SCHEMA_DESCRIPTION)
