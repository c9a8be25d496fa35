import logging
from typing import Dict, List

from pydantic import BaseModel, Field
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from .errors import MalformedRequestError

logger = logging.getLogger(__name__)


class UploadedFile(BaseModel):
    filename: str
    data: bytes


class FormFields(BaseModel):
    fields: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, List[UploadedFile]] = Field(default_factory=dict)

    def get(self, name: str) -> str:
        return self.fields.get(name, "")

    def get_file(self, name: str):
        uploads = self.files.get(name)
        return uploads[0] if uploads else None

    def get_files(self, name: str) -> List[UploadedFile]:
        return list(self.files.get(name, []))


async def extract_form(request: Request) -> FormFields:
    content_type = request.headers.get("content-type", "")
    if "multipart/form-data" not in content_type:
        raise MalformedRequestError("Expected multipart/form-data")

    try:
        form = await request.form()
    except AssertionError:
        # Starlette asserts when python-multipart is not installed
        raise MalformedRequestError("FormData parsing not available in this runtime.")
    except MultiPartException as e:
        raise MalformedRequestError(f"Invalid multipart body: {e.message}")
    except StarletteHTTPException as e:
        raise MalformedRequestError(f"Invalid multipart body: {e.detail}")

    out = FormFields()
    try:
        for name, value in form.multi_items():
            if isinstance(value, UploadFile):
                data = await value.read()
                out.files.setdefault(name, []).append(
                    UploadedFile(filename=value.filename or name, data=data)
                )
            elif name not in out.fields:
                out.fields[name] = value
    finally:
        await form.close()

    file_counts = {k: len(v) for k, v in out.files.items()}
    logger.info(f"Extracted form: fields={sorted(out.fields)} files={file_counts}")
    return out
