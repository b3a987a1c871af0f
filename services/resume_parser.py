"""
Line-oriented heuristics that turn plain resume text into a ResumeInfo.

Text is split into trimmed, non-empty lines. A section header line switches
the current section; every following line belongs to that section until the
next header. Lines before the first header belong to no section and are
dropped. Each section's lines then go through a dedicated parser.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models.resume_models import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeInfo,
    ResumeSections,
)
from services.text_metrics import calculate_readability_score, count_words, extract_keywords

logger = logging.getLogger(__name__)

SECTION_HEADERS = {
    'experience': re.compile(
        r'^(experience|work experience|professional experience|employment|career|work history)$',
        re.IGNORECASE,
    ),
    'education': re.compile(r'^(education|academic background|qualifications)$', re.IGNORECASE),
    'skills': re.compile(
        r'^(skills|technical skills|core competencies|expertise|technologies)$',
        re.IGNORECASE,
    ),
    'summary': re.compile(r'^(summary|profile|objective|about|overview)$', re.IGNORECASE),
    'certifications': re.compile(r'^(certifications|certificates|licenses)$', re.IGNORECASE),
    'projects': re.compile(r'^(projects|portfolio|notable projects)$', re.IGNORECASE),
}

# Searched over the whole text when no skills section yields anything.
COMMON_SKILLS = [
    # Programming languages
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "PHP", "Ruby",
    "Go", "Rust", "Swift", "Kotlin",
    # Web technologies
    "React", "Angular", "Vue.js", "Node.js", "Express", "Next.js", "HTML",
    "CSS", "SASS", "LESS",
    # Databases
    "MySQL", "PostgreSQL", "MongoDB", "Redis", "SQLite", "Oracle", "SQL Server",
    # Cloud & DevOps
    "AWS", "Azure", "Google Cloud", "Docker", "Kubernetes", "Jenkins", "Git",
    "GitHub", "GitLab",
    # Frameworks & libraries
    "Spring", "Django", "Flask", "Laravel", "Rails", "jQuery", "Bootstrap",
    "Tailwind",
    # Tools & methodologies
    "Agile", "Scrum", "Kanban", "CI/CD", "TDD", "REST", "GraphQL",
    "Microservices",
]

EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b')
PHONE_PATTERN = re.compile(r'(\+?1[-.\s]?)?([0-9]{3})[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})')
LINKEDIN_PATTERN = re.compile(r'linkedin\.com/in/[A-Za-z0-9-]+')
GITHUB_PATTERN = re.compile(r'github\.com/[A-Za-z0-9-]+')
NAME_PATTERN = re.compile(r"^[A-Za-z\s.'-]+$")

TITLE_COMPANY_PATTERN = re.compile(r'^(.+?)\s+(?:at|@|\|)\s+(.+)$')
YEAR_PATTERN = re.compile(r'\d{4}')
BULLET_PREFIX = re.compile(r'^[•\-*]\s*')
SKILL_DELIMITERS = re.compile(r'[,;•\-\n]')

DEGREE_PATTERN = re.compile(r'bachelor|master|phd|doctorate|associate|diploma|certificate', re.IGNORECASE)
INSTITUTION_PATTERN = re.compile(r'university|college|institute|school', re.IGNORECASE)
GPA_PATTERN = re.compile(r'gpa|grade', re.IGNORECASE)

BULLET = "•"


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def match_section_header(line: str) -> Optional[str]:
    for section, pattern in SECTION_HEADERS.items():
        if pattern.match(line):
            return section
    return None


def segment_sections(lines: List[str]) -> List[Tuple[str, List[str]]]:
    """
    Group lines under the section header that precedes them.

    Returns (section, lines) pairs in document order; headers with no
    content are left out.
    """
    segments: List[Tuple[str, List[str]]] = []
    current_section: Optional[str] = None
    current_lines: List[str] = []

    for line in lines:
        section = match_section_header(line)
        if section:
            if current_section and current_lines:
                segments.append((current_section, current_lines))
            current_section = section
            current_lines = []
        elif current_section:
            current_lines.append(line)

    if current_section and current_lines:
        segments.append((current_section, current_lines))

    return segments


def _is_entry_header(line: str) -> bool:
    return len(line) > 5 and BULLET not in line and "-" not in line


@dataclass
class _ExperienceDraft:
    title: str
    company: str = ""
    duration: str = ""
    description: List[str] = field(default_factory=list)

    def build(self) -> ExperienceEntry:
        return ExperienceEntry(
            title=self.title,
            company=self.company,
            duration=self.duration,
            description=list(self.description),
        )


def parse_experience(lines: List[str]) -> List[ExperienceEntry]:
    entries: List[ExperienceEntry] = []
    current: Optional[_ExperienceDraft] = None

    for line in lines:
        if _is_entry_header(line):
            if current:
                entries.append(current.build())
            match = TITLE_COMPANY_PATTERN.match(line)
            if match:
                current = _ExperienceDraft(
                    title=match.group(1).strip(),
                    company=match.group(2).strip(),
                )
            else:
                current = _ExperienceDraft(title=line)
        elif YEAR_PATTERN.search(line) and ("-" in line or "to" in line):
            if current:
                current.duration = line
        elif BULLET in line or "-" in line or len(line) > 20:
            if current:
                current.description.append(BULLET_PREFIX.sub("", line))

    if current:
        entries.append(current.build())

    return entries


@dataclass
class _EducationDraft:
    degree: str
    institution: str = ""
    year: str = ""
    gpa: Optional[str] = None

    def build(self) -> EducationEntry:
        return EducationEntry(
            degree=self.degree,
            institution=self.institution,
            year=self.year,
            gpa=self.gpa,
        )


def parse_education(lines: List[str]) -> List[EducationEntry]:
    entries: List[EducationEntry] = []
    current: Optional[_EducationDraft] = None

    for line in lines:
        if DEGREE_PATTERN.search(line):
            if current:
                entries.append(current.build())
            current = _EducationDraft(degree=line)
        elif current is None:
            # Details before the first degree line have no entry to land in.
            continue
        elif INSTITUTION_PATTERN.search(line):
            current.institution = line
        elif YEAR_PATTERN.search(line):
            current.year = line
        elif GPA_PATTERN.search(line):
            current.gpa = line

    if current:
        entries.append(current.build())

    return entries


def parse_skills(lines: List[str]) -> List[str]:
    items = (item.strip() for item in SKILL_DELIMITERS.split(" ".join(lines)))
    return [item for item in items if 1 < len(item) < 30]


def parse_certifications(lines: List[str]) -> List[str]:
    return [line for line in lines if len(line) > 3]


def parse_projects(lines: List[str]) -> List[ProjectEntry]:
    """
    Group project lines under their title lines.

    ``technologies`` is left empty; nothing in the text is mapped to it yet.
    """
    projects: List[ProjectEntry] = []
    name: Optional[str] = None
    description: List[str] = []

    for line in lines:
        if _is_entry_header(line):
            if name:
                projects.append(ProjectEntry(name=name, description=" ".join(description)))
            name = line
            description = []
        elif name:
            description.append(line)

    if name:
        projects.append(ProjectEntry(name=name, description=" ".join(description)))

    return projects


def extract_skills_from_text(text: str) -> List[str]:
    lower_text = text.lower()
    return [skill for skill in COMMON_SKILLS if skill.lower() in lower_text]


def _first_match(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(0) if match else None


def _looks_like_name(line: str) -> bool:
    if EMAIL_PATTERN.search(line) or PHONE_PATTERN.search(line):
        return False
    if not 2 < len(line) < 50:
        return False
    return bool(NAME_PATTERN.match(line)) and len(line.split(" ")) <= 4


def extract_personal_info(text: str) -> PersonalInfo:
    name = next((line for line in split_lines(text)[:5] if _looks_like_name(line)), None)

    return PersonalInfo(
        name=name,
        email=_first_match(EMAIL_PATTERN, text),
        phone=_first_match(PHONE_PATTERN, text),
        linkedin=_first_match(LINKEDIN_PATTERN, text),
        github=_first_match(GITHUB_PATTERN, text),
    )


def extract_sections(text: str) -> ResumeSections:
    parsed: Dict[str, object] = {}

    for section, lines in segment_sections(split_lines(text)):
        logger.debug(f"Parsing {section} section ({len(lines)} lines)")
        if section == 'summary':
            parsed['summary'] = " ".join(lines)
        elif section == 'experience':
            parsed['experience'] = parse_experience(lines)
        elif section == 'education':
            parsed['education'] = parse_education(lines)
        elif section == 'skills':
            parsed['skills'] = parse_skills(lines)
        elif section == 'certifications':
            parsed['certifications'] = parse_certifications(lines)
        elif section == 'projects':
            parsed['projects'] = parse_projects(lines)

    if not parsed.get('skills'):
        parsed['skills'] = extract_skills_from_text(text)

    return ResumeSections(**parsed)


def extract_resume_info(text: str) -> ResumeInfo:
    """
    Build the structured resume model from plain text.

    Never raises for string input: anything that cannot be detected is
    left at its empty default.
    """
    return ResumeInfo(
        personal_info=extract_personal_info(text),
        sections=extract_sections(text),
        keywords=extract_keywords(text),
        total_words=count_words(text),
        readability_score=calculate_readability_score(text),
    )
