"""FastAPI router for folder and file operations."""

from functools import lru_cache
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from cloudru_storage.config.logger import LoggerOptions, get_logger
from cloudru_storage.config.settings import get_settings
from cloudru_storage.exceptions import StorageError, is_not_found
from cloudru_storage.s3.builder import S3ClientBuilder
from cloudru_storage.storage.service import ObjectStorageService, object_key

logger = get_logger(__name__)
router = APIRouter(prefix="/storage", tags=["Storage"])

STREAM_CHUNK_SIZE = 64 * 1024


@lru_cache(maxsize=1)
def get_storage_service() -> ObjectStorageService:
    """Build the service once from application settings."""
    settings = get_settings()
    logger_options = None
    if settings.logging.errors:
        logger_options = LoggerOptions(file_path=settings.logging.file, format=settings.logging.format)
    return S3ClientBuilder.from_settings(settings.s3, logger_options).build()


def _storage_http_error(exc: Exception, detail: str) -> HTTPException:
    if is_not_found(exc):
        return HTTPException(status_code=404, detail=f"{detail}: not found")
    return HTTPException(status_code=500, detail=f"{detail}: {str(exc)}")


# =======================
# Request/Response Models
# =======================
class FolderCreateRequest(BaseModel):
    name: str


class FolderRenameRequest(BaseModel):
    old_name: str
    new_name: str


class FileRenameRequest(BaseModel):
    old_key: str
    new_key: str


class FolderList(BaseModel):
    folders: List[str]
    count: int


class FileList(BaseModel):
    folder: str
    keys: List[str]
    count: int


class ObjectKeyResponse(BaseModel):
    key: str


class DeleteResponse(BaseModel):
    deleted: str


# =======================
# Folder Endpoints
# =======================
@router.get("/folders", response_model=FolderList)
async def list_folders(service: ObjectStorageService = Depends(get_storage_service)):
    """Список папок верхнего уровня."""
    try:
        folders = await service.list_folders()
    except StorageError as e:
        logger.error(f"Error listing folders: {str(e)}")
        raise _storage_http_error(e, "Error listing folders")
    return {"folders": folders, "count": len(folders)}


@router.post("/folders", response_model=ObjectKeyResponse, status_code=201)
async def create_folder(
    request: FolderCreateRequest,
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Создание папки."""
    if not request.name.strip("/"):
        raise HTTPException(status_code=422, detail="Folder name must not be empty")
    try:
        key = await service.create_folder(request.name)
    except StorageError as e:
        logger.error(f"Error creating folder: {str(e)}")
        raise _storage_http_error(e, "Error creating folder")
    return {"key": key}


@router.patch("/folders/rename", response_model=ObjectKeyResponse)
async def rename_folder(
    request: FolderRenameRequest,
    service: ObjectStorageService = Depends(get_storage_service),
):
    """
    Переименование папки.

    Операция не транзакционна: при ошибке часть объектов может остаться под обоими именами.
    """
    try:
        await service.rename_folder(request.old_name, request.new_name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageError as e:
        logger.error(f"Error renaming folder: {str(e)}")
        raise _storage_http_error(e, "Error renaming folder")
    return {"key": request.new_name.rstrip("/") + "/"}


@router.delete("/folders", response_model=DeleteResponse)
async def delete_folder(
    name: str = Query(..., description="Folder name"),
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Удаление папки со всем содержимым."""
    try:
        await service.delete_folder(name)
    except StorageError as e:
        logger.error(f"Error deleting folder: {str(e)}")
        raise _storage_http_error(e, "Error deleting folder")
    return {"deleted": name}


# =======================
# File Endpoints
# =======================
@router.get("/files", response_model=FileList)
async def list_files(
    folder: str = Query(..., description="Folder name"),
    service: ObjectStorageService = Depends(get_storage_service),
):
    """
    Список ключей в папке.

    Маркер самой папки тоже входит в результат.
    """
    try:
        keys = await service.list_files_in_folder(folder)
    except StorageError as e:
        logger.error(f"Error listing files: {str(e)}")
        raise _storage_http_error(e, "Error listing files")
    return {"folder": folder, "keys": keys, "count": len(keys)}


@router.post("/files", response_model=ObjectKeyResponse, status_code=201)
async def upload_file(
    folder: str = Query(..., description="Folder name"),
    file: UploadFile = File(..., description="File to upload"),
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Загрузка файла в папку."""
    if not file.filename:
        raise HTTPException(status_code=422, detail="File name is required")
    content = await file.read()
    try:
        key = await service.upload_bytes(
            folder, file.filename, content, content_type=file.content_type or "application/octet-stream"
        )
    except StorageError as e:
        logger.error(f"Error uploading file: {str(e)}")
        raise _storage_http_error(e, "Error uploading file")
    return {"key": key}


@router.get("/files/download")
async def download_file(
    folder: str = Query(..., description="Folder name"),
    name: str = Query(..., description="File name"),
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Скачивание файла."""
    try:
        body = await service.get_file(folder, name)
    except StorageError as e:
        logger.error(f"Error downloading file: {str(e)}")
        raise _storage_http_error(e, f"Error downloading {folder}/{name}")

    def iter_body():
        try:
            while True:
                chunk = body.read(STREAM_CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        finally:
            body.close()

    return StreamingResponse(
        iter_body(),
        media_type="application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(name)}"},
    )


@router.patch("/files/rename", response_model=ObjectKeyResponse)
async def rename_file(
    request: FileRenameRequest,
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Переименование файла по полным ключам."""
    try:
        await service.rename_file(request.old_key, request.new_key)
    except StorageError as e:
        logger.error(f"Error renaming file: {str(e)}")
        raise _storage_http_error(e, "Error renaming file")
    return {"key": request.new_key}


@router.delete("/files", response_model=DeleteResponse)
async def delete_file(
    folder: str = Query(..., description="Folder name"),
    name: str = Query(..., description="File name"),
    service: ObjectStorageService = Depends(get_storage_service),
):
    """Удаление файла."""
    try:
        await service.delete_file(folder, name)
    except StorageError as e:
        logger.error(f"Error deleting file: {str(e)}")
        raise _storage_http_error(e, "Error deleting file")
    return {"deleted": object_key(folder, name)}


__all__ = ["router", "get_storage_service"]
