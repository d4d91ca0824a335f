from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from ..models import UploadResult
from .base import BaseClient


class FilesClient(BaseClient):
    module = "files"

    async def upload_vehicle_photo(
        self, vehicle_id: int, content: bytes | BinaryIO, filename: str, content_type: str = "image/jpeg"
    ) -> str:
        return await self._upload(
            f"/files/vehicles/{vehicle_id}/photo", "photo", content, filename, content_type, "vehicle_photo"
        )

    async def upload_transfer_proof(
        self, sales_id: int, content: bytes | BinaryIO, filename: str, content_type: str = "image/jpeg"
    ) -> str:
        return await self._upload(
            f"/files/sales/{sales_id}/transfer-proof",
            "transfer_proof",
            content,
            filename,
            content_type,
            "transfer_proof",
        )

    async def upload_purchase_transfer_proof(
        self, purchase_id: int, content: bytes | BinaryIO, filename: str, content_type: str = "application/pdf"
    ) -> str:
        return await self._upload(
            f"/files/purchases/{purchase_id}/transfer-proof",
            "transfer_proof",
            content,
            filename,
            content_type,
            "purchase_transfer_proof",
        )

    async def _upload(
        self,
        path: str,
        field: str,
        content: bytes | BinaryIO,
        filename: str,
        content_type: str,
        operation: str,
    ) -> str:
        files = {field: (Path(filename).name, content, content_type)}
        data = await self._request("POST", path, files=files, operation=operation)
        return self._parse(UploadResult, data).file_url
