import logging
from typing import List, Optional

from models.resume_models import ATSAnalysis, ParsedDataSummary, ResumeReport
from services.ats_scorer import ATSScorer
from services.pdf_processor import PDFProcessor, TextExtractor
from services.resume_parser import extract_resume_info

logger = logging.getLogger(__name__)


class ResumeAnalyzer:
    """
    Runs extraction, parsing and scoring for one resume at a time.

    Holds no per-resume state, so one instance can serve concurrent calls.
    """

    def __init__(self, extractor: Optional[TextExtractor] = None,
                 scorer: Optional[ATSScorer] = None):
        self.extractor = extractor or PDFProcessor()
        self.scorer = scorer or ATSScorer()

    def run(self, resume_bytes: bytes,
            job_keywords: Optional[List[str]] = None) -> ResumeReport:
        """
        Analyze a resume and keep the intermediate results

        Raises DecodeError when the bytes are not a readable document.
        """
        parsed = self.extractor.extract_text(resume_bytes)
        resume_info = extract_resume_info(parsed.text)
        analysis = self.scorer.analyze(resume_info, job_keywords)

        logger.info(
            f"Resume analyzed: {resume_info.total_words} words, "
            f"score {analysis.score} ({analysis.grade})"
        )

        return ResumeReport(
            parsed_data=ParsedDataSummary(pages=parsed.page_count, info=parsed.document_info),
            extracted_info=resume_info,
            ats_analysis=analysis,
        )

    def analyze(self, resume_bytes: bytes,
                job_keywords: Optional[List[str]] = None) -> ATSAnalysis:
        return self.run(resume_bytes, job_keywords).ats_analysis
