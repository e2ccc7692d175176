"""
Templating Context

Responsibilities:
- Loads resume identity data (JSON descriptor, shared header/styling, Markdown)
- Validates it into a typed data model
- Compiles and renders HTML resume templates into content fragments

Owns: Resume data model, template cache, template helpers
Never: Assembles CSS or wraps fragments into documents
"""

from folio.contexts.templating.data_loader import DataLoader
from folio.contexts.templating.helpers import format_date, has_content
from folio.contexts.templating.resume_data_structure import (
    ExperienceEntry,
    MarkdownSection,
    ResumeData,
    ResumeDescriptor,
    SharedHeader,
    SkillCategory,
)
from folio.contexts.templating.template_renderer import CompiledTemplate, TemplateRenderer

__all__ = [
    # Data loading
    "DataLoader",
    # Data structure classes
    "ExperienceEntry",
    "MarkdownSection",
    "ResumeData",
    "ResumeDescriptor",
    "SharedHeader",
    "SkillCategory",
    # Rendering
    "CompiledTemplate",
    "TemplateRenderer",
    "format_date",
    "has_content",
]
