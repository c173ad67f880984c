"""Domain models for the document analysis pipeline"""
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List


# ============= Helpers =============

def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def unique_strings(values: Iterable[Any]) -> List[str]:
    """Drop non-strings, blanks and case-insensitive duplicates. First casing seen is kept."""
    seen = set()
    out: List[str] = []
    for value in values:
        if not isinstance(value, str) or not value.strip():
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(value)
    return out


# ============= Upload / Text Models =============

@dataclass
class UploadedFile:
    """A stored upload. Its content is read once and the file is deleted afterwards."""
    original_name: str
    path: str
    size: int
    extension: str


@dataclass
class TextChunk:
    """Sentence-aligned slice of a document's text"""
    index: int
    content: str


# ============= Analysis Models =============

@dataclass
class Phase:
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass
class Persona:
    name: str
    description: str = ""
    goals: List[str] = field(default_factory=list)
    pain_points: List[str] = field(default_factory=list)

    def merge(self, other: "Persona") -> None:
        """Fold other into self: keep a non-empty description, union goals and pain points."""
        if not self.description:
            self.description = other.description
        self.goals = unique_strings(self.goals + other.goals)
        self.pain_points = unique_strings(self.pain_points + other.pain_points)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "goals": list(self.goals),
            "painPoints": list(self.pain_points),
        }


@dataclass
class FileError:
    error: str
    details: str

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "details": self.details}


@dataclass
class AnalysisResult:
    """
    Structured project data extracted from one chunk, one file or one batch.

    phases and personas are unique by case-insensitive name, requirements by
    case-insensitive content. errors is only populated when a file failed.
    """
    project_name: str = ""
    description: str = ""
    phases: List[Phase] = field(default_factory=list)
    personas: List[Persona] = field(default_factory=list)
    requirements: List[str] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any, include_errors: bool = True) -> "AnalysisResult":
        """
        Normalize an untyped model reply into a strict record.
        Missing lists become empty, nameless entries are dropped and
        duplicates inside the reply collapse to their first occurrence.
        With include_errors=False any "errors" key in raw is ignored; only
        the pipeline itself may report failed files.
        """
        if not isinstance(raw, dict):
            return cls()

        phases: List[Phase] = []
        phase_names = set()
        for item in _as_list(raw.get("phases")):
            if not isinstance(item, dict):
                continue
            name = _as_text(item.get("name")).strip()
            if not name or name.lower() in phase_names:
                continue
            phase_names.add(name.lower())
            phases.append(Phase(name=name, description=_as_text(item.get("description"))))

        personas: List[Persona] = []
        by_name: Dict[str, Persona] = {}
        for item in _as_list(raw.get("personas")):
            if not isinstance(item, dict):
                continue
            name = _as_text(item.get("name")).strip()
            if not name:
                continue
            persona = Persona(
                name=name,
                description=_as_text(item.get("description")),
                goals=unique_strings(_as_list(item.get("goals"))),
                pain_points=unique_strings(_as_list(item.get("painPoints"))),
            )
            existing = by_name.get(name.lower())
            if existing is None:
                by_name[name.lower()] = persona
                personas.append(persona)
            else:
                existing.merge(persona)

        errors = [
            FileError(error=_as_text(e.get("error")), details=_as_text(e.get("details")))
            for e in _as_list(raw.get("errors"))
            if isinstance(e, dict)
        ] if include_errors else []

        return cls(
            project_name=_as_text(raw.get("projectName")),
            description=_as_text(raw.get("description")),
            phases=phases,
            personas=personas,
            requirements=unique_strings(_as_list(raw.get("requirements"))),
            errors=errors,
        )

    @classmethod
    def failed(cls, filename: str, message: str) -> "AnalysisResult":
        """Degraded result for a file that could not be analyzed."""
        return cls(
            description=f"Error: {message}",
            errors=[FileError(error=f"Failed to process {filename}", details=message)],
        )

    def copy(self) -> "AnalysisResult":
        return deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "projectName": self.project_name,
            "description": self.description,
            "phases": [p.to_dict() for p in self.phases],
            "personas": [p.to_dict() for p in self.personas],
            "requirements": list(self.requirements),
        }
        if self.errors:
            data["errors"] = [e.to_dict() for e in self.errors]
        return data
