from __future__ import annotations

from ..models import UploadedFile
from .base import BaseClient, _expect_object


class FilesClient(BaseClient):
    def upload_file(self, content: bytes, filename: str, content_type: str = "application/octet-stream") -> UploadedFile:
        data = self._request(
            "POST",
            "integration-endpoints/Core/UploadFile",
            files={"file": (filename, content, content_type)},
            module="files",
            operation="upload",
        )
        return UploadedFile.model_validate(_expect_object(data, "upload"))
