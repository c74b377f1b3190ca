"""
FastAPI application for document verification
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import config
from models import ApplicantData, EligibilityPolicy, VerificationResult
from scanner import verify_document


# Initialize FastAPI app
app = FastAPI(
    title=config.API_TITLE,
    version=config.API_VERSION,
    description=config.API_DESCRIPTION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request model
class VerifyRequest(BaseModel):
    """Request model for document verification"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_data: Optional[str] = Field(None, description="Base64 encoded image or data URI (e.g. 'data:image/png;base64,...')")
    image_url: Optional[str] = Field(None, description="URL of the document image")
    ocr_text: Optional[str] = Field(None, description="Already extracted document text, skips OCR")
    applicant_data: Optional[ApplicantData] = Field(None, description="Applicant declared data")
    eligibility_policy: Optional[EligibilityPolicy] = Field(None, description="Eligibility rules to evaluate")


# API endpoints
@app.get("/")
async def root():
    """Root endpoint - service banner"""
    return {
        "message": "Document Verification API",
        "version": config.API_VERSION,
        "endpoints": {
            "verify": "/verify - POST endpoint to verify a passport/ID card image",
            "health": "/health - GET endpoint to check API health",
            "docs": "/docs - Swagger UI documentation"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "Document Verification API",
        "version": config.API_VERSION
    }


@app.post("/verify", response_model=VerificationResult)
def verify(request: VerifyRequest):
    """
    Verify a passport or ID card

    Runs OCR on the image (unless ocrText is given), decodes the MRZ, validates
    the extracted fields and, when both applicantData and eligibilityPolicy are
    sent, evaluates visa eligibility.

    Example:
        ```json
        {
            "imageData": "data:image/png;base64,iVBORw0KGgo...",
            "applicantData": {
                "name": "Anna Maria Eriksson",
                "dateOfBirth": "1974-08-12",
                "passportNumber": "L898902C3",
                "nationality": "UTO",
                "visaType": "tourist"
            },
            "eligibilityPolicy": {
                "minPassportValidity": 6,
                "blockedNationalities": ["XXX"]
            }
        }
        ```
    """
    if not (request.image_data or request.image_url or request.ocr_text):
        return JSONResponse(
            status_code=400,
            content={"error": "Image data is required"}
        )

    try:
        return verify_document(
            image_data=request.image_data,
            image_url=request.image_url,
            ocr_text=request.ocr_text or None,
            applicant_data=request.applicant_data,
            eligibility_policy=request.eligibility_policy,
        )
    except Exception as e:
        print(f"✗ Verification error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to verify document", "details": str(e)}
        )


# Run the application
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
