import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from models.resume_models import UploadResponse
from services.exceptions import DecodeError
from services.resume_analyzer import ResumeAnalyzer

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.app_version)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
resume_analyzer = ResumeAnalyzer()


def parse_job_keywords(raw: str) -> list:
    return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is working"}


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "pdf_processor": "running",
            "ats_scorer": "running"
        }
    }


@app.post("/upload-resume", response_model=UploadResponse)
async def upload_resume(file: UploadFile = File(...), job_keywords: str = Form("")):
    """
    Upload and analyze a resume file
    """
    try:
        # Validate file type
        if file.content_type != "application/pdf":
            raise HTTPException(status_code=400, detail="Only PDF files are supported")

        content = await file.read()

        # Validate file size
        if len(content) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File size must be less than {settings.max_upload_size_mb}MB"
            )

        logger.info(f"Processing file: {file.filename} ({len(content)} bytes)")
        report = resume_analyzer.run(content, parse_job_keywords(job_keywords))

        logger.info(f"Analysis completed for: {file.filename}")
        return UploadResponse(
            filename=file.filename or "",
            parsed_data=report.parsed_data,
            extracted_info=report.extracted_info,
            ats_analysis=report.ats_analysis,
        )

    except HTTPException:
        raise
    except DecodeError as e:
        logger.warning(f"Rejected unreadable PDF {file.filename}: {str(e)}")
        raise HTTPException(status_code=400, detail="Could not extract text from PDF")
    except Exception as e:
        logger.error(f"Error processing resume: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error processing resume: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
