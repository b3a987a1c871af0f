from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResumeModel(BaseModel):
    """Frozen base: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ParsedDocument(ResumeModel):
    text: str
    page_count: int = 0
    document_info: Dict[str, Union[datetime, str]] = Field(default_factory=dict)


class PersonalInfo(ResumeModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None


class ExperienceEntry(ResumeModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: List[str] = Field(default_factory=list)


class EducationEntry(ResumeModel):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: Optional[str] = None


class ProjectEntry(ResumeModel):
    name: str
    description: str = ""
    # Never filled by the projects parser.
    technologies: List[str] = Field(default_factory=list)


class ResumeSections(ResumeModel):
    summary: Optional[str] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)


class ResumeInfo(ResumeModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    sections: ResumeSections = Field(default_factory=ResumeSections)
    keywords: List[str] = Field(default_factory=list)
    total_words: int = 0
    readability_score: int = 0


class Issue(ResumeModel):
    type: str  # "error", "warning", "suggestion"
    category: str
    message: str
    impact: str  # "high", "medium", "low"
    suggestion: Optional[str] = None


class KeywordAnalysis(ResumeModel):
    found: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    density: float = 0.0


class SectionAnalysis(ResumeModel):
    present: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)


class FormattingAnalysis(ResumeModel):
    score: int = 100
    issues: List[str] = Field(default_factory=list)


class ReadabilityAnalysis(ResumeModel):
    score: int = 0
    level: str = ""


class ATSAnalysis(ResumeModel):
    score: int
    grade: str
    issues: List[Issue] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    keywords: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
    sections: SectionAnalysis = Field(default_factory=SectionAnalysis)
    formatting: FormattingAnalysis = Field(default_factory=FormattingAnalysis)
    readability: ReadabilityAnalysis = Field(default_factory=ReadabilityAnalysis)


class ParsedDataSummary(ResumeModel):
    pages: int
    info: Dict[str, Union[datetime, str]] = Field(default_factory=dict)


class ResumeReport(ResumeModel):
    parsed_data: ParsedDataSummary
    extracted_info: ResumeInfo
    ats_analysis: ATSAnalysis


class UploadResponse(ResumeReport):
    success: bool = True
    filename: str
