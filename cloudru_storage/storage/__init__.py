"""Folder emulation and file operations over Object Storage."""

from .service import ObjectStorageService, folder_prefix, object_key

__all__ = ["ObjectStorageService", "folder_prefix", "object_key"]
