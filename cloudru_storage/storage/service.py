"""Folder and file operations over a single Cloud.ru Object Storage bucket."""

import asyncio
import os
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from cloudru_storage.config.logger import ErrorLogger, NullErrorLogger, get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def folder_prefix(folder_name: str) -> str:
    """Normalize a folder name to a key prefix with exactly one trailing '/'."""
    return folder_name.rstrip("/") + "/"


def object_key(folder_name: str, file_name: str) -> str:
    """Build the key of a file inside a folder."""
    if not folder_name:
        return file_name
    return folder_prefix(folder_name) + file_name


class ObjectStorageService:
    """
    Сервис для работы с объектным хранилищем Cloud.ru.

    Позволяет создавать, переименовывать и удалять папки, загружать, получать,
    переименовывать и удалять файлы, а также получать списки папок и файлов
    в бакете. Папки эмулируются префиксами ключей и пустыми объектами-маркерами,
    ключ которых оканчивается на '/'.

    Каждая публичная операция выполняется внутри обработчика ошибок: ошибка
    передаётся в журнал ошибок и пробрасывается дальше без изменений.
    """

    def __init__(self, client: Any, bucket_name: str, error_logger: Optional[ErrorLogger] = None):
        """
        Args:
            client: boto3 S3 client (or an object with the same methods)
            bucket_name: Bucket all operations work on
            error_logger: Receives (message, exception) on failures; no-op by default
        """
        self._client = client
        self._bucket = bucket_name
        self._error_logger: ErrorLogger = error_logger or NullErrorLogger()
        logger.info(f"ObjectStorageService initialized for bucket: {bucket_name}")

    @property
    def bucket_name(self) -> str:
        return self._bucket

    @property
    def client(self) -> Any:
        return self._client

    @property
    def logging_enabled(self) -> bool:
        return not isinstance(self._error_logger, NullErrorLogger)

    # =======================
    # Folder operations
    # =======================
    async def create_folder(self, folder_name: str) -> str:
        """
        Создаёт папку (пустой объект-маркер) в бакете.

        Args:
            folder_name: Имя папки, со слэшем на конце или без

        Returns:
            Ключ созданного маркера

        Raises:
            ValueError: Если имя папки пустое
        """
        if not folder_name.strip("/"):
            raise ValueError("Folder name must not be empty")
        key = folder_prefix(folder_name)

        async def operation() -> str:
            await asyncio.to_thread(self._client.put_object, Bucket=self._bucket, Key=key, Body=b"")
            logger.info(f"Created folder marker: {key}")
            return key

        return await self._execute(operation, f"Возникла ошибка при создании папки {folder_name}")

    async def rename_folder(self, old_folder_name: str, new_folder_name: str) -> None:
        """
        Переименовывает папку.

        S3 не умеет переименовывать префиксы, поэтому каждый объект копируется
        под новый префикс и удаляется со старого, после чего старая папка
        удаляется. Операция не транзакционна: при ошибке посреди цикла часть
        объектов останется под обоими префиксами.

        Raises:
            ValueError: Если новая папка совпадает со старой или вложена в неё
        """
        old_prefix = folder_prefix(old_folder_name)
        new_prefix = folder_prefix(new_folder_name)
        # Иначе завершающее удаление старой папки сотрёт скопированные объекты
        if new_prefix.startswith(old_prefix):
            raise ValueError(f"Cannot rename folder {old_prefix} into itself: {new_prefix}")

        async def operation() -> None:
            keys = await self.list_files_in_folder(old_folder_name)
            for old_key in keys:
                # Заменяется только ведущий префикс, вложенные пути не трогаем
                new_key = new_prefix + old_key[len(old_prefix):]
                await self._copy_object(old_key, new_key)
                await self._delete_object(old_key)
            await self.delete_folder(old_folder_name)
            logger.info(f"Renamed folder {old_prefix} to {new_prefix} ({len(keys)} objects)")

        await self._execute(
            operation,
            f"Возникла ошибка при переименовании папки {old_folder_name} в {new_folder_name}",
        )

    async def delete_folder(self, folder_name: str) -> None:
        """Удаляет папку и всё её содержимое, по одному объекту."""

        async def operation() -> None:
            keys = await self.list_files_in_folder(folder_name)
            for key in keys:
                await self._delete_object(key)
            logger.info(f"Deleted folder {folder_prefix(folder_name)} ({len(keys)} objects)")

        await self._execute(operation, f"Возникла ошибка при удалении папки {folder_name}")

    async def list_folders(self) -> List[str]:
        """
        Возвращает имена папок верхнего уровня в порядке листинга.

        Читается только первая страница листинга.
        """

        async def operation() -> List[str]:
            response = await asyncio.to_thread(
                self._client.list_objects_v2, Bucket=self._bucket, Delimiter="/"
            )
            prefixes = response.get("CommonPrefixes", [])
            return [item["Prefix"].rstrip("/") for item in prefixes]

        return await self._execute(operation, "Произошла ошибка при получении списка папок")

    async def list_files_in_folder(self, folder_name: str) -> List[str]:
        """
        Возвращает ключи всех объектов в папке.

        Первым элементом обычно идёт сам маркер папки ("<folder>/"), а имена
        файлов содержат префикс папки. Читается только первая страница листинга.
        """
        prefix = folder_prefix(folder_name)

        async def operation() -> List[str]:
            response = await asyncio.to_thread(
                self._client.list_objects_v2, Bucket=self._bucket, Prefix=prefix
            )
            keys = [obj["Key"] for obj in response.get("Contents", [])]
            logger.debug(f"Found {len(keys)} objects in prefix '{prefix}'")
            return keys

        return await self._execute(
            operation, f"Произошла ошибка при получении списка файлов в папке {folder_name}"
        )

    # =======================
    # File operations
    # =======================
    async def upload_file(self, folder_name: str, file_path: str | os.PathLike) -> str:
        """
        Загружает локальный файл в папку, перезаписывая существующий объект.

        Args:
            folder_name: Папка назначения
            file_path: Путь к локальному файлу

        Returns:
            Ключ загруженного объекта

        Raises:
            FileNotFoundError: Если локальный файл не найден
        """
        path = Path(file_path)
        key = object_key(folder_name, path.name)

        async def operation() -> str:
            if not path.is_file():
                raise FileNotFoundError(f"File not found: {file_path}")
            await asyncio.to_thread(self._client.upload_file, str(path), self._bucket, key)
            logger.info(f"Uploaded {path} to {key}")
            return key

        return await self._execute(
            operation, f"Возникла ошибка при сохранении файла {file_path} в папке {folder_name}"
        )

    async def upload_bytes(
        self,
        folder_name: str,
        file_name: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """
        Сохраняет содержимое из памяти как файл в папке.

        Returns:
            Ключ загруженного объекта
        """
        key = object_key(folder_name, file_name)

        async def operation() -> str:
            kwargs = {"Bucket": self._bucket, "Key": key, "Body": data}
            if content_type:
                kwargs["ContentType"] = content_type
            await asyncio.to_thread(self._client.put_object, **kwargs)
            logger.info(f"Uploaded {key}, size: {len(data)} bytes")
            return key

        return await self._execute(
            operation, f"Возникла ошибка при сохранении файла {file_name} в папке {folder_name}"
        )

    async def get_file(self, folder_name: str, file_name: str) -> Any:
        """
        Возвращает поток данных файла.

        Поток установлен на начало содержимого; вызывающий код владеет им
        и должен закрыть его после использования.
        """
        key = object_key(folder_name, file_name)

        async def operation() -> Any:
            response = await asyncio.to_thread(self._client.get_object, Bucket=self._bucket, Key=key)
            return response["Body"]

        return await self._execute(
            operation, f"Произошла ошибка при получении файла {file_name} из папки {folder_name}"
        )

    async def rename_file(self, old_key: str, new_key: str) -> None:
        """
        Переименовывает файл: копирует объект под новый ключ и удаляет старый.

        Ключи полные, не относительно папки. Операция не атомарна.
        """
        await self._copy_object(old_key, new_key)
        await self._delete_object(old_key)

    async def delete_file(self, folder_name: str, file_name: str) -> None:
        """Удаляет файл из папки. Удаление отсутствующего ключа не считается ошибкой."""
        await self._delete_object(object_key(folder_name, file_name))

    # =======================
    # Helpers
    # =======================
    async def _copy_object(self, source_key: str, destination_key: str) -> None:
        async def operation() -> None:
            await asyncio.to_thread(
                self._client.copy_object,
                Bucket=self._bucket,
                Key=destination_key,
                CopySource={"Bucket": self._bucket, "Key": source_key},
            )
            logger.debug(f"Copied {source_key} to {destination_key}")

        await self._execute(
            operation,
            f"Возникла ошибка при копировании объекта из {source_key} в {destination_key}",
        )

    async def _delete_object(self, key: str) -> None:
        async def operation() -> None:
            await asyncio.to_thread(self._client.delete_object, Bucket=self._bucket, Key=key)
            logger.debug(f"Deleted {key}")

        await self._execute(operation, f"Возникла ошибка при удалении объекта {key}")

    async def _execute(self, operation: Callable[[], Awaitable[T]], error_message: str) -> T:
        """Await ``operation``; on failure log ``error_message`` and re-raise."""
        try:
            return await operation()
        except Exception as exc:
            self._error_logger.error(error_message, exc)
            raise


__all__ = ["ObjectStorageService", "folder_prefix", "object_key"]
