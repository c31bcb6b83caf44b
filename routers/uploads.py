# routers/uploads.py
"""
Generic file upload used by onboarding (ID proof, photo, signature).
"""
from typing import Literal

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from dependencies import get_current_user
from models import User
from schemas.common import UrlResponse
from utils import storage

router = APIRouter(prefix="/api/uploads", tags=["uploads"])

UploadCategory = Literal["identity", "photos", "signatures", "documents", "profiles"]


@router.post("", response_model=UrlResponse, status_code=status.HTTP_201_CREATED, summary="Upload a file")
def upload_file(
     file: UploadFile = File(...),
     category: UploadCategory = Form("documents"),
     user: User = Depends(get_current_user),
):
     """
     Accepts jpg, jpeg, png, webp and pdf. Returns the public URL to store on
     the record that references the file.
     """
     url = storage.store_upload(file, category)
     return UrlResponse(url=url, message="File uploaded successfully")
