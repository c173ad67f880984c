"""Recovery of a JSON object from a chatty model reply"""
import re

FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\r?\n(.*?)\r?\n?[ \t]*```", re.DOTALL | re.IGNORECASE)
STRAY_FENCE = re.compile(r"^```(?:json)?|```$", re.IGNORECASE)


def recover_json_object(raw_text: str) -> str:
    """
    Best-effort extraction of a bare JSON object from model output.

    1. If the reply contains a fenced code block, keep only its contents.
    2. Otherwise drop stray fences, then everything before the first '{'
       and after the last '}'.

    The result is not guaranteed to be valid JSON; callers still parse it.
    """
    text = (raw_text or "").strip()

    match = FENCED_BLOCK.search(text)
    if match:
        text = match.group(1)

    text = STRAY_FENCE.sub("", text.strip()).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        text = text[start:end + 1]
    return text
