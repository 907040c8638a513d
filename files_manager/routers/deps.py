# files_manager/routers/deps.py
from functools import lru_cache

import redis
from fastapi import Depends
from sqlalchemy.orm import Session

from files_manager.core.config import Settings, get_settings
from files_manager.models.database import SessionLocal
from files_manager.services.files import FileService
from files_manager.services.session import SessionService
from files_manager.stores.blob import LocalBlobStore, S3BlobStore
from files_manager.stores.catalog import FileCatalog, UserDirectory
from files_manager.stores.identity import RedisIdentityStore
from files_manager.stores.jobs import RedisJobQueue


# DB session dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def _redis_client(url: str) -> redis.Redis:
    return redis.Redis.from_url(url, decode_responses=True)


def get_identity_store(settings: Settings = Depends(get_settings)) -> RedisIdentityStore:
    return RedisIdentityStore(_redis_client(settings.redis_url))


def get_job_queue(settings: Settings = Depends(get_settings)) -> RedisJobQueue:
    return RedisJobQueue(_redis_client(settings.redis_url), settings.thumbnail_queue)


@lru_cache
def _s3_store(bucket_name: str, access_key_id: str | None, secret_access_key: str | None,
              region: str | None) -> S3BlobStore:
    return S3BlobStore.from_credentials(bucket_name, access_key_id, secret_access_key, region)


def get_blob_store(settings: Settings = Depends(get_settings)):
    if settings.blob_backend == "s3":
        return _s3_store(
            settings.aws_s3_bucket_name,
            settings.aws_access_key_id,
            settings.aws_secret_access_key,
            settings.aws_region,
        )
    return LocalBlobStore()


def get_session_service(
    db: Session = Depends(get_db),
    identity_store=Depends(get_identity_store),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    return SessionService(identity_store, UserDirectory(db), settings.session_ttl_seconds)


def get_file_service(
    db: Session = Depends(get_db),
    sessions: SessionService = Depends(get_session_service),
    blob_store=Depends(get_blob_store),
    jobs=Depends(get_job_queue),
    settings: Settings = Depends(get_settings),
) -> FileService:
    return FileService(
        sessions,
        FileCatalog(db),
        blob_store,
        jobs,
        folder_path=settings.folder_path,
    )
