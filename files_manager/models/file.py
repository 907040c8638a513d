# files_manager/models/file.py
from sqlalchemy import Boolean, Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from files_manager.models.database import Base

FILE_TYPES = ("folder", "file", "image")


class FileRecord(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String(16), nullable=False)          # one of FILE_TYPES
    # 0 is the root; otherwise the id of a folder (checked on insert, not by the db)
    parent_id = Column(Integer, nullable=False, default=0, index=True)
    is_public = Column(Boolean, nullable=False, default=False)
    local_path = Column(String, nullable=True)         # blob location, None for folders

    # Many files → one owner (User)
    owner = relationship("User", back_populates="files")
