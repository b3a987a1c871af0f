"""Tests for the end-to-end analysis pipeline."""

import pytest

from services.exceptions import DecodeError
from services.resume_analyzer import ResumeAnalyzer


def test_run_bundles_every_stage(fake_extractor):
    report = ResumeAnalyzer(extractor=fake_extractor).run(b"%PDF-fake")

    assert fake_extractor.calls == 1
    assert report.parsed_data.pages == 1
    assert report.extracted_info.personal_info.email == "john@x.com"
    assert report.ats_analysis.sections.present == ["experience", "education", "skills"]


def test_analyze_is_deterministic(fake_extractor):
    analyzer = ResumeAnalyzer(extractor=fake_extractor)

    first = analyzer.analyze(b"%PDF-fake", ["python", "kubernetes"])
    second = analyzer.analyze(b"%PDF-fake", ["python", "kubernetes"])

    assert first.model_dump_json() == second.model_dump_json()


def test_job_keywords_are_passed_to_scorer(fake_extractor):
    analysis = ResumeAnalyzer(extractor=fake_extractor).analyze(b"", ["kubernetes"])

    assert analysis.keywords.missing == ["kubernetes"]
    assert analysis.keywords.density == 0


def test_empty_document_still_produces_analysis(extractor_factory):
    analysis = ResumeAnalyzer(extractor=extractor_factory("")).analyze(b"")

    assert 0 <= analysis.score <= 100
    assert analysis.grade == "F"


def test_decode_error_propagates():
    with pytest.raises(DecodeError):
        ResumeAnalyzer().analyze(b"not a pdf")


def test_real_pdf_through_default_extractor(resume_pdf):
    report = ResumeAnalyzer().run(resume_pdf, ["python", "airflow"])

    assert report.parsed_data.pages == 1
    assert report.parsed_data.info["title"] == "Jane Doe Resume"
    assert report.extracted_info.personal_info.email == "jane.doe@example.com"
    assert report.ats_analysis.keywords.found == ["python", "airflow"]
