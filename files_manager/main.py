from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from files_manager.core.config import get_settings
from files_manager.core.errors import FilesManagerError
from files_manager.core.logging import setup_logging
from files_manager.models.database import Base, engine
from files_manager.models import file, user  # noqa: F401  registers the tables
from files_manager.routers import auth, files

setup_logging(get_settings().log_level)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="files_manager")

# include our routers
app.include_router(auth.router)
app.include_router(files.router)


@app.exception_handler(FilesManagerError)
async def files_manager_error(request: Request, exc: FilesManagerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
