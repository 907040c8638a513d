"""
Blob store backends.

Both expose the same three calls, ``mkdir``, ``write_file`` and ``read_file``.
Failures come out as ``OSError``; a missing blob is ``FileNotFoundError``.
"""
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError


class LocalBlobStore:
    def mkdir(self, path: str, recursive: bool = True) -> None:
        Path(path).mkdir(parents=recursive, exist_ok=True)

    def write_file(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def read_file(self, path: str) -> bytes:
        return Path(path).read_bytes()


class S3BlobStore:
    """Blobs as S3 objects; a "path" is the object key."""

    def __init__(self, client, bucket_name: str):
        self.s3 = client
        self.bucket_name = bucket_name

    @classmethod
    def from_credentials(cls, bucket_name, access_key_id=None, secret_access_key=None,
                         region=None) -> "S3BlobStore":
        client = boto3.client(
            "s3",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )
        return cls(client, bucket_name)

    def mkdir(self, path: str, recursive: bool = True) -> None:
        # S3 has no directories, keys carry the full prefix
        return None

    def write_file(self, path: str, data: bytes) -> None:
        try:
            self.s3.put_object(Bucket=self.bucket_name, Key=path.lstrip("/"), Body=data)
        except (BotoCoreError, ClientError) as e:
            raise OSError(str(e)) from e

    def read_file(self, path: str) -> bytes:
        try:
            obj = self.s3.get_object(Bucket=self.bucket_name, Key=path.lstrip("/"))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NoSuchKey", "404", "NotFound"):
                raise FileNotFoundError(path) from e
            raise OSError(str(e)) from e
        except BotoCoreError as e:
            raise OSError(str(e)) from e
        return obj["Body"].read()
