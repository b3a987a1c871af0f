import logging
import re
from typing import List, Optional

from models.resume_models import (
    ATSAnalysis,
    FormattingAnalysis,
    Issue,
    KeywordAnalysis,
    ReadabilityAnalysis,
    ResumeInfo,
    SectionAnalysis,
)
from services.text_metrics import get_readability_level, round_half_up

logger = logging.getLogger(__name__)

IMPACT_PENALTIES = {
    'high': 15,
    'medium': 8,
    'low': 3,
}

GRADE_THRESHOLDS = [
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (45, "D+"),
    (40, "D"),
]


def get_grade(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def calculate_overall_score(issues: List[Issue], strengths: List[str],
                            keyword_density: float, formatting_score: int) -> int:
    """Calculate overall ATS score"""
    score = 100.0

    # Deduct points for issues
    for issue in issues:
        score -= IMPACT_PENALTIES.get(issue.impact, 0)

    # Bonus for strengths
    score += min(20, len(strengths) * 2)

    # Weight by keyword coverage and formatting
    score *= 0.7 + 0.3 * (keyword_density / 100)
    score *= 0.8 + 0.2 * (formatting_score / 100)

    return max(0, min(100, round_half_up(score)))


class ATSScorer:
    def __init__(self):
        self.required_sections = ['experience', 'education', 'skills']
        self.recommended_sections = ['summary', 'certifications', 'projects']

        # Used when the caller supplies no job keywords
        self.industry_keywords = [
            'leadership', 'management', 'communication', 'teamwork',
            'problem-solving', 'analytical', 'strategic', 'innovative',
            'collaborative', 'results-driven', 'agile', 'scrum',
            'project management', 'data analysis', 'customer service'
        ]

        self.action_verbs = [
            'achieved', 'managed', 'led', 'developed', 'implemented',
            'created', 'improved', 'increased', 'reduced', 'optimized',
            'designed', 'built', 'launched', 'delivered'
        ]

    def analyze(self, resume_info: ResumeInfo,
                job_keywords: Optional[List[str]] = None) -> ATSAnalysis:
        """
        Score a parsed resume for ATS compatibility.

        The passes run in a fixed order (sections, keywords, formatting,
        content quality) so issues and strengths come out in detection
        order. Score and grade are derived from them last.
        """
        issues: List[Issue] = []
        strengths: List[str] = []

        sections = self.analyze_sections(resume_info, issues, strengths)
        keywords = self.analyze_keywords(resume_info, job_keywords or [], issues, strengths)
        formatting = self.analyze_formatting(resume_info, issues, strengths)
        self.analyze_content_quality(resume_info, issues, strengths)

        score = calculate_overall_score(issues, strengths, keywords.density, formatting.score)
        grade = get_grade(score)
        logger.info(f"ATS analysis complete: score={score} grade={grade} issues={len(issues)}")

        return ATSAnalysis(
            score=score,
            grade=grade,
            issues=issues,
            strengths=strengths,
            keywords=keywords,
            sections=sections,
            formatting=formatting,
            readability=ReadabilityAnalysis(
                score=resume_info.readability_score,
                level=get_readability_level(resume_info.readability_score),
            ),
        )

    def has_section(self, resume_info: ResumeInfo, section: str) -> bool:
        sections = resume_info.sections
        if section == 'summary':
            return bool(sections.summary)
        return len(getattr(sections, section, [])) > 0

    def analyze_sections(self, resume_info: ResumeInfo, issues: List[Issue],
                         strengths: List[str]) -> SectionAnalysis:
        """Check required and recommended sections"""
        present = []
        missing = []

        for section in self.required_sections:
            if self.has_section(resume_info, section):
                present.append(section)
                strengths.append(f"{section.capitalize()} section present")
            else:
                missing.append(section)
                issues.append(Issue(
                    type="error",
                    category="Structure",
                    message=f"Missing {section} section",
                    impact="high",
                    suggestion=f"Add a dedicated {section} section to your resume"
                ))

        for section in self.recommended_sections:
            if self.has_section(resume_info, section):
                present.append(section)
                strengths.append(f"{section.capitalize()} section included")
            else:
                missing.append(section)
                issues.append(Issue(
                    type="suggestion",
                    category="Structure",
                    message=f"Consider adding {section} section",
                    impact="low",
                    suggestion=f"A {section} section can strengthen your resume"
                ))

        return SectionAnalysis(present=present, missing=missing)

    def analyze_keywords(self, resume_info: ResumeInfo, job_keywords: List[str],
                         issues: List[Issue], strengths: List[str]) -> KeywordAnalysis:
        """Match target keywords against extracted keywords and skills"""
        candidates = list(dict.fromkeys(
            [k.lower() for k in resume_info.keywords]
            + [s.lower() for s in resume_info.sections.skills]
        ))
        target_keywords = job_keywords if job_keywords else self.industry_keywords

        found = []
        missing = []
        for keyword in target_keywords:
            needle = keyword.lower()
            if any(needle in candidate for candidate in candidates):
                found.append(keyword)
            else:
                missing.append(keyword)

        density = len(found) / len(target_keywords) * 100

        if density < 30:
            issues.append(Issue(
                type="error",
                category="Keywords",
                message="Low keyword density - may not pass ATS filters",
                impact="high",
                suggestion="Include more industry-relevant keywords throughout your resume"
            ))
        elif density < 50:
            issues.append(Issue(
                type="warning",
                category="Keywords",
                message="Moderate keyword density - room for improvement",
                impact="medium",
                suggestion="Consider adding more relevant keywords to improve ATS compatibility"
            ))
        else:
            strengths.append("Good keyword density for ATS systems")

        return KeywordAnalysis(found=found, missing=missing, density=density)

    def analyze_formatting(self, resume_info: ResumeInfo, issues: List[Issue],
                           strengths: List[str]) -> FormattingAnalysis:
        """Check contact details and resume length"""
        personal_info = resume_info.personal_info
        format_score = 100
        format_issues = []

        def flag(issue: Issue, penalty: int):
            nonlocal format_score
            issues.append(issue)
            format_issues.append(issue.message)
            format_score -= penalty

        if not personal_info.email:
            flag(Issue(
                type="error",
                category="Contact Info",
                message="Email address not found",
                impact="high",
                suggestion="Include a professional email address"
            ), 20)
        else:
            strengths.append("Email address present")

        if not personal_info.phone:
            flag(Issue(
                type="warning",
                category="Contact Info",
                message="Phone number not found",
                impact="medium",
                suggestion="Include a phone number for easy contact"
            ), 10)
        else:
            strengths.append("Phone number present")

        if not personal_info.name:
            flag(Issue(
                type="error",
                category="Contact Info",
                message="Name not clearly identified",
                impact="high",
                suggestion="Ensure your name is prominently displayed at the top"
            ), 15)
        else:
            strengths.append("Name clearly identified")

        if resume_info.total_words < 200:
            flag(Issue(
                type="warning",
                category="Content Length",
                message="Resume appears too short",
                impact="medium",
                suggestion="Consider adding more detail to your experience and achievements"
            ), 15)
        elif resume_info.total_words > 800:
            flag(Issue(
                type="suggestion",
                category="Content Length",
                message="Resume may be too lengthy",
                impact="low",
                suggestion="Consider condensing content to 1-2 pages for better readability"
            ), 5)
        else:
            strengths.append("Appropriate resume length")

        return FormattingAnalysis(score=max(0, format_score), issues=format_issues)

    def analyze_content_quality(self, resume_info: ResumeInfo, issues: List[Issue],
                                strengths: List[str]) -> None:
        """Check for metrics, action verbs and skill count"""
        descriptions = [
            line
            for entry in resume_info.sections.experience
            for line in entry.description
        ]

        if any(re.search(r"\d", line) for line in descriptions):
            strengths.append("Quantified achievements present")
        else:
            issues.append(Issue(
                type="suggestion",
                category="Content Quality",
                message="Add quantified achievements to demonstrate impact",
                impact="medium",
                suggestion="Include numbers, percentages, or metrics to show your accomplishments"
            ))

        if any(verb in line.lower() for line in descriptions for verb in self.action_verbs):
            strengths.append("Strong action verbs used")
        else:
            issues.append(Issue(
                type="suggestion",
                category="Content Quality",
                message="Use more action verbs to describe your experience",
                impact="low",
                suggestion='Start bullet points with strong action verbs like "achieved," "managed," or "developed"'
            ))

        skill_count = len(resume_info.sections.skills)
        if skill_count < 5:
            issues.append(Issue(
                type="warning",
                category="Skills",
                message="Limited skills listed",
                impact="medium",
                suggestion="Include more relevant technical and soft skills"
            ))
        elif skill_count > 20:
            issues.append(Issue(
                type="suggestion",
                category="Skills",
                message="Too many skills listed",
                impact="low",
                suggestion="Focus on the most relevant skills for your target role"
            ))
        else:
            strengths.append("Appropriate number of skills listed")
