"""
Общие фикстуры: in-memory S3 клиент с поведением boto3 для нужных методов.
"""

import io
from typing import Dict, List, Optional

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody

from cloudru_storage.storage.service import ObjectStorageService


def client_error(code: str, operation: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """Keeps objects of every bucket in dicts; lists keys in lexicographic order like S3."""

    def __init__(self):
        self.buckets: Dict[str, Dict[str, bytes]] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[str, ClientError] = {}

    def _objects(self, bucket: str) -> Dict[str, bytes]:
        return self.buckets.setdefault(bucket, {})

    def _check_failure(self, operation: str, key: Optional[str] = None) -> None:
        for target in (f"{operation}:{key}", operation):
            if target in self.fail_on:
                raise self.fail_on[target]

    def put_object(self, Bucket, Key, Body=b"", ContentType=None):
        self.calls.append(("put_object", Key))
        self._check_failure("put_object", Key)
        self._objects(Bucket)[Key] = bytes(Body)
        return {"ETag": '"etag"'}

    def upload_file(self, Filename, Bucket, Key):
        self.calls.append(("upload_file", Key))
        self._check_failure("upload_file", Key)
        with open(Filename, "rb") as fp:
            self._objects(Bucket)[Key] = fp.read()

    def get_object(self, Bucket, Key):
        self.calls.append(("get_object", Key))
        self._check_failure("get_object", Key)
        objects = self._objects(Bucket)
        if Key not in objects:
            raise client_error("NoSuchKey", "GetObject", "The specified key does not exist.")
        data = objects[Key]
        return {"Body": StreamingBody(io.BytesIO(data), len(data)), "ContentLength": len(data)}

    def list_objects_v2(self, Bucket, Prefix="", Delimiter=None):
        self.calls.append(("list_objects_v2", Prefix))
        self._check_failure("list_objects_v2", Prefix)
        keys = sorted(k for k in self._objects(Bucket) if k.startswith(Prefix))
        response = {"KeyCount": 0}
        contents = []
        common_prefixes = []
        for key in keys:
            rest = key[len(Prefix):]
            if Delimiter and Delimiter in rest:
                prefix = Prefix + rest[: rest.index(Delimiter) + len(Delimiter)]
                if prefix not in common_prefixes:
                    common_prefixes.append(prefix)
            else:
                contents.append({"Key": key, "Size": len(self._objects(Bucket)[key])})
        if contents:
            response["Contents"] = contents
        if common_prefixes:
            response["CommonPrefixes"] = [{"Prefix": p} for p in common_prefixes]
        response["KeyCount"] = len(contents) + len(common_prefixes)
        return response

    def copy_object(self, Bucket, Key, CopySource):
        self.calls.append(("copy_object", CopySource["Key"], Key))
        self._check_failure("copy_object", CopySource["Key"])
        source = self._objects(CopySource["Bucket"])
        if CopySource["Key"] not in source:
            raise client_error("NoSuchKey", "CopyObject")
        self._objects(Bucket)[Key] = source[CopySource["Key"]]
        return {"CopyObjectResult": {"ETag": '"etag"'}}

    def delete_object(self, Bucket, Key):
        self.calls.append(("delete_object", Key))
        self._check_failure("delete_object", Key)
        self._objects(Bucket).pop(Key, None)
        return {}


class RecordingErrorLogger:
    def __init__(self):
        self.records: List[tuple] = []

    def error(self, message, exc):
        self.records.append((message, exc))


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def error_logger():
    return RecordingErrorLogger()


@pytest.fixture
def service(s3_client, error_logger):
    return ObjectStorageService(s3_client, "test-bucket", error_logger)


@pytest.fixture
def bucket(s3_client):
    return s3_client._objects("test-bucket")
