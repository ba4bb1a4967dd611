"""
Pydantic schemas for the photo upload endpoint.
"""
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union


class UploadSuccess(BaseModel):
    """A file stored in Google Drive."""
    status: Literal["success"] = "success"
    id: str = Field(..., description="Google Drive file ID")
    name: str = Field(..., description="Display name in Drive (original filename)")
    link: str = Field(..., description="Shareable webViewLink")
    size: int = Field(..., description="Size in bytes")
    message: str = "File uploaded to Google Drive successfully"


class UploadFailure(BaseModel):
    """A file that could not be stored in Google Drive."""
    status: Literal["failed"] = "failed"
    name: str = Field(..., description="Original filename")
    error: str = Field(..., description="Error reported while uploading")


UploadResult = Annotated[
    Union[UploadSuccess, UploadFailure],
    Field(discriminator="status")
]


class UploadSummary(BaseModel):
    """Counts over one batch of upload results."""
    total: int
    successful: int
    failed: int

    @classmethod
    def from_results(cls, results: List[UploadResult]) -> "UploadSummary":
        total = len(results)
        successful = sum(1 for result in results if result.status == "success")
        return cls(total=total, successful=successful, failed=total - successful)


class UploadResponse(BaseModel):
    """Response schema for POST /api/upload-photos."""
    message: str
    files: List[UploadResult]
    summary: UploadSummary

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Successfully processed 1 out of 2 files!",
                "files": [
                    {
                        "status": "success",
                        "id": "1AbCdEfGhIjKlMnOp",
                        "name": "a.jpg",
                        "link": "https://drive.google.com/file/d/1AbCdEfGhIjKlMnOp/view?usp=drivesdk",
                        "size": 48213,
                        "message": "File uploaded to Google Drive successfully"
                    },
                    {
                        "status": "failed",
                        "name": "b.png",
                        "error": "The user has exceeded their Drive storage quota"
                    }
                ],
                "summary": {"total": 2, "successful": 1, "failed": 1}
            }
        }

    @classmethod
    def from_results(cls, results: List[UploadResult]) -> "UploadResponse":
        summary = UploadSummary.from_results(results)
        return cls(
            message=f"Successfully processed {summary.successful} out of {summary.total} files!",
            files=results,
            summary=summary,
        )


class ErrorResponse(BaseModel):
    """Error body for rejected or failed upload requests."""
    message: str
    error: Optional[str] = None
