from fastapi import APIRouter, Depends, File, Request, UploadFile

from escore.api.deps import get_app_settings
from escore.config import Settings
from escore.errors import ValidationFailed
from escore.services.uploads import store_upload

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload")
def upload_image(
    request: Request,
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_app_settings),
):
    if image is None or not image.filename:
        raise ValidationFailed("No file uploaded")
    name = store_upload(settings.upload_dir, image.filename, image.file)
    # absolute URL aus Schema + Host des Requests
    return {"url": str(request.url_for("uploads", path=name))}
