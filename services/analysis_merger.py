"""Left-fold merge of analysis results (chunk -> file, file -> batch)"""
from typing import Dict, Sequence

from core.domain import AnalysisResult, Persona, unique_strings


def merge_into(combined: AnalysisResult, result: AnalysisResult) -> AnalysisResult:
    """
    Fold one result into the accumulator in place. First seen wins on every
    conflict; phases, personas and requirements stay unique case-insensitively.
    The incoming result is left untouched.
    """
    result = result.copy()

    if not combined.project_name and result.project_name:
        combined.project_name = result.project_name

    if result.description:
        if not combined.description:
            combined.description = result.description
        elif result.description not in combined.description:
            combined.description += "\n\n" + result.description

    existing_phases = {p.name.lower() for p in combined.phases}
    for phase in result.phases:
        key = phase.name.lower()
        if key not in existing_phases:
            combined.phases.append(phase)
            existing_phases.add(key)

    existing_personas: Dict[str, Persona] = {p.name.lower(): p for p in combined.personas}
    for persona in result.personas:
        key = persona.name.lower()
        if key in existing_personas:
            existing_personas[key].merge(persona)
        else:
            combined.personas.append(persona)
            existing_personas[key] = persona

    combined.requirements = unique_strings(combined.requirements + result.requirements)
    combined.errors.extend(result.errors)
    return combined


def merge_results(results: Sequence[AnalysisResult]) -> AnalysisResult:
    """Merge results left to right. Inputs are not modified."""
    if not results:
        return AnalysisResult()

    combined = results[0].copy()
    for result in results[1:]:
        merge_into(combined, result)
    return combined
