import io

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import StreamingResponse

from files_manager.routers.deps import get_file_service
from files_manager.services.files import FileService

router = APIRouter(prefix="/files")


# --- upload a new file or create a folder ---
@router.post("", status_code=201)
def upload_file(
    body: dict | None = Body(None),
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    return files.create_file(x_token, body or {})


# --- list one page of a folder ---
@router.get("")
def list_files(
    parentId: str = "0",
    page: str = "0",
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    return files.list_files(x_token, parentId, page)


# --- show one of the caller's files ---
@router.get("/{file_id}")
def show_file(
    file_id: str,
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    return files.get_file(x_token, file_id)


@router.put("/{file_id}/publish")
def publish_file(
    file_id: str,
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    return files.set_visibility(x_token, file_id, True)


@router.put("/{file_id}/unpublish")
def unpublish_file(
    file_id: str,
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    return files.set_visibility(x_token, file_id, False)


# --- raw content; anonymous callers only see public files ---
@router.get("/{file_id}/data")
def file_data(
    file_id: str,
    size: str | None = None,
    x_token: str | None = Header(None),
    files: FileService = Depends(get_file_service),
):
    data, content_type = files.read_content(x_token, file_id, size)
    return StreamingResponse(io.BytesIO(data), media_type=content_type)
