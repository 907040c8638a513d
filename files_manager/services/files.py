"""
File and folder records: creation with hierarchy checks, owner-scoped
lookups, paginated listing, publish/unpublish and content retrieval.

Every record handed back to a caller goes through ``project``, which drops
the blob location.
"""
import base64
import binascii
import logging
import mimetypes

from files_manager.core.errors import NotFound, UnsupportedOperation, Unauthorized, ValidationFailed
from files_manager.core.ids import MAX_ID, ROOT_ID, is_root, parse_id
from files_manager.models.file import FILE_TYPES
from files_manager.services.placement import place

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def project(document: dict) -> dict:
    return {
        "id": document["id"],
        "userId": document["user_id"],
        "name": document["name"],
        "type": document["type"],
        "isPublic": document["is_public"],
        "parentId": document["parent_id"],
    }


def content_type_for(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    if mime_type is None:
        return "application/octet-stream"
    if mime_type.startswith("text/"):
        return f"{mime_type}; charset=utf-8"
    return mime_type


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return value is True or value == 1


def _as_page(value) -> int:
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 0
    return max(page, 0)


class FileService:
    def __init__(self, sessions, catalog, blob_store, jobs, folder_path: str):
        self.sessions = sessions
        self.catalog = catalog
        self.blob_store = blob_store
        self.jobs = jobs
        self.folder_path = folder_path

    def create_file(self, token: str | None, params: dict) -> dict:
        """Validate ``params`` and add a folder, file or image for the caller.

        Checks run in a fixed order and the first one that fails decides the
        error: name, type, data (non-folders only), then the parent.
        """
        user = self.sessions.authenticate(token)

        name = params.get("name")
        file_type = params.get("type")
        data = params.get("data")
        parent_id = params.get("parentId", ROOT_ID)

        if not name or not isinstance(name, str):
            raise ValidationFailed("Missing name")
        if not isinstance(file_type, str) or file_type not in FILE_TYPES:
            raise ValidationFailed("Missing type")
        if not data and file_type != "folder":
            raise ValidationFailed("Missing data")
        parent_id = ROOT_ID if is_root(parent_id) else self._parent_folder_id(parent_id)

        document = {
            "user_id": user["id"],
            "name": name,
            "type": file_type,
            "is_public": _as_bool(params.get("isPublic", False)),
            "parent_id": parent_id,
        }
        if file_type != "folder":
            document["local_path"] = place(self.blob_store, self.folder_path, self._decode(data))

        try:
            document["id"] = self.catalog.insert_one(dict(document))
        except Exception:
            if "local_path" in document:
                logger.error("Catalog insert failed, blob %s is orphaned", document["local_path"])
            raise
        logger.info("Created %s %s for user %s", file_type, document["id"], user["id"])

        if file_type == "image":
            self._enqueue_thumbnail(document)
        return project(document)

    def get_file(self, token: str | None, file_id) -> dict:
        user = self.sessions.authenticate(token)
        file_id = parse_id(file_id)
        if file_id is None:
            raise NotFound()
        document = self.catalog.find_one({"id": file_id, "user_id": user["id"]})
        if document is None:
            raise NotFound()
        return project(document)

    def list_files(self, token: str | None, parent_id=ROOT_ID, page=0) -> list[dict]:
        """One page of the records under ``parent_id``, in insertion order.

        A parent that is malformed, missing or not a folder gives an empty
        list rather than an error.
        """
        self.sessions.authenticate(token)
        page = _as_page(page)
        if page * PAGE_SIZE > MAX_ID:
            return []

        if is_root(parent_id):
            parent_id = ROOT_ID
        else:
            parent_id = parse_id(parent_id)
            if parent_id is None:
                return []
            folder = self.catalog.find_one({"id": parent_id})
            if folder is None or folder["type"] != "folder":
                return []

        pipeline = [
            {"$match": {"parent_id": parent_id}},
            {"$skip": page * PAGE_SIZE},
            {"$limit": PAGE_SIZE},
        ]
        return [project(document) for document in self.catalog.aggregate(pipeline)]

    def set_visibility(self, token: str | None, file_id, make_public: bool) -> dict:
        user = self.sessions.authenticate(token)
        file_id = parse_id(file_id)
        if file_id is None:
            raise Unauthorized()

        document = self.catalog.find_one_and_update(
            {"id": file_id, "user_id": user["id"]},
            {"is_public": bool(make_public)},
        )
        if document is None:
            raise NotFound()
        logger.info("File %s is now %s", file_id, "public" if make_public else "private")
        return project(document)

    def read_content(self, token: str | None, file_id, variant: str | None = None) -> tuple[bytes, str]:
        """Bytes and content type of a file the caller may see.

        Public files are readable by anyone, private ones only with the
        owner's token; everything else looks like a missing file.
        """
        file_id = parse_id(file_id)
        if file_id is None:
            raise NotFound()
        document = self.catalog.find_one({"id": file_id})
        if document is None or not self._can_read(document, token):
            raise NotFound()
        if document["type"] == "folder":
            raise UnsupportedOperation("A folder doesn't have content")

        location = document["local_path"]
        if variant:
            if not (variant.isascii() and variant.isalnum()):
                raise NotFound()
            location = f"{location}_{variant}"
        try:
            data = self.blob_store.read_file(location)
        except OSError:
            raise NotFound()
        return data, content_type_for(document["name"])

    def _can_read(self, document: dict, token: str | None) -> bool:
        if document["is_public"]:
            return True
        return parse_id(self.sessions.resolve_identity(token)) == document["user_id"]

    def _parent_folder_id(self, parent_id) -> int:
        parsed = parse_id(parent_id)
        parent = self.catalog.find_one({"id": parsed}) if parsed is not None else None
        if parent is None:
            raise ValidationFailed("Parent not found")
        if parent["type"] != "folder":
            raise ValidationFailed("Parent is not a folder")
        return parsed

    @staticmethod
    def _decode(data) -> bytes:
        if isinstance(data, bytes):
            return data
        try:
            return base64.b64decode(data)
        except (binascii.Error, TypeError, ValueError) as e:
            raise ValidationFailed(str(e))

    def _enqueue_thumbnail(self, document: dict) -> None:
        if self.jobs is None:
            return
        payload = {"fileId": str(document["id"]), "userId": str(document["user_id"])}
        try:
            self.jobs.enqueue(payload)
        except Exception:
            logger.warning("Could not enqueue thumbnail job for file %s", document["id"], exc_info=True)
