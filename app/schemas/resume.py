from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Null entries inside editor lists count as empty strings.
EditorText = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


class _EditorModel(BaseModel):
    """Accepts the editor's camelCase payloads as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info) -> Any:
        if value is not None:
            return value
        field = cls.model_fields[info.field_name]
        if field.default_factory is not None:
            return field.default_factory()
        return field.default


class PersonalInfo(_EditorModel):
    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    photo: str = ""
    links: list[EditorText] = Field(default_factory=list)


class ExperienceEntry(_EditorModel):
    id: str = ""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    bullets: list[EditorText] = Field(default_factory=list)


class EducationEntry(_EditorModel):
    id: str = ""
    school: str = ""
    degree: str = ""
    field: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""


class SkillGroup(_EditorModel):
    category: str = ""
    items: list[EditorText] = Field(default_factory=list)


class ResumeDocument(_EditorModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[SkillGroup] = Field(default_factory=list)
    certifications: list[Any] = Field(default_factory=list)
    projects: list[Any] = Field(default_factory=list)
    languages: list[Any] = Field(default_factory=list)

    def all_bullets(self) -> list[str]:
        return [bullet for entry in self.experience for bullet in entry.bullets]

    def all_skill_items(self) -> list[str]:
        return [item for group in self.skills for item in group.items]
