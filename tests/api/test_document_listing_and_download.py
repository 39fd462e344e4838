"""Listing, duplicate check and download endpoints over in-memory collaborators."""

import hashlib
from urllib.parse import quote

from httpx import AsyncClient

from sikap.domain.enums import ActivityAction

UPLOAD_URL = "/api/v1/documents/upload"
PDF_A = b"%PDF-1.4\nfirst\n%%EOF"
PDF_B = b"%PDF-1.4\nsecond\n%%EOF"


async def _upload(
    client: AsyncClient,
    content: bytes,
    *,
    application_id: str = "app-private-1",
    document_type: str = "proposal",
    filename: str = "proposal.pdf",
) -> dict:
    response = await client.post(
        UPLOAD_URL,
        data={
            "type": "application",
            "applicationId": application_id,
            "documentType": document_type,
        },
        files={"file": (filename, content, "application/pdf")},
    )
    assert response.status_code == 200, response.text
    return response.json()["document"]


async def test_list_requires_application_id(client: AsyncClient) -> None:
    response = await client.get(UPLOAD_URL)
    assert response.status_code == 400
    assert response.json()["error"] == "Application ID is required"


async def test_list_newest_first(client: AsyncClient) -> None:
    first = await _upload(client, PDF_A)
    second = await _upload(client, PDF_B, document_type="profile")
    response = await client.get(UPLOAD_URL, params={"applicationId": "app-private-1"})
    assert response.status_code == 200
    documents = response.json()["documents"]
    assert [d["id"] for d in documents] == [second["id"], first["id"]]
    assert set(documents[0]) == {
        "id",
        "originalFilename",
        "fileSize",
        "mimeType",
        "documentType",
        "uploadedAt",
    }


async def test_list_other_application_is_empty(client: AsyncClient) -> None:
    await _upload(client, PDF_A)
    response = await client.get(UPLOAD_URL, params={"applicationId": "app-public-1"})
    assert response.json() == {"documents": []}


async def test_duplicate_check(client: AsyncClient) -> None:
    document = await _upload(client, PDF_A)
    params = {
        "applicationId": "app-private-1",
        "documentType": "proposal",
        "fileHash": hashlib.sha256(PDF_A).hexdigest().upper(),
    }
    hit = await client.get("/api/v1/documents/duplicates", params=params)
    assert hit.json() == {"duplicate": True, "documentId": document["id"]}

    params["documentType"] = "profile"
    miss = await client.get("/api/v1/documents/duplicates", params=params)
    assert miss.json() == {"duplicate": False, "documentId": None}


async def test_duplicate_check_validates_hash_length(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/documents/duplicates",
        params={"applicationId": "a", "documentType": "b", "fileHash": "abc"},
    )
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_download_private_document(client: AsyncClient, fake_backend) -> None:
    document = await _upload(client, PDF_A, filename="Laporan Akhir.pdf")
    response = await client.get(f"/api/v1/documents/{document['id']}/download")
    assert response.status_code == 200
    assert response.content == PDF_A
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-length"] == str(len(PDF_A))
    assert response.headers["content-disposition"] == (
        f'attachment; filename="{quote("Laporan Akhir.pdf", safe="")}"'
    )
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["cache-control"] == "private, no-cache, no-store, must-revalidate"
    assert response.headers["pragma"] == "no-cache"
    assert response.headers["expires"] == "0"

    download_entries = [
        e for e in fake_backend.activity.entries if e.action is ActivityAction.DOWNLOAD
    ]
    assert len(download_entries) == 1
    assert download_entries[0].user_id == "user-owner"


async def test_download_public_document_requires_token(client: AsyncClient) -> None:
    document = await _upload(client, PDF_A, application_id="app-public-1")
    url = f"/api/v1/documents/{document['id']}/download"

    missing = await client.get(url)
    assert missing.status_code == 403
    assert missing.json()["error"] == "Invalid access token"

    wrong = await client.get(url, params={"token": "guess"})
    assert wrong.status_code == 403

    ok = await client.get(url, params={"token": "public-token-abc123"})
    assert ok.status_code == 200
    assert ok.content == PDF_A


async def test_download_unknown_document_is_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/documents/missing-id/download")
    assert response.status_code == 404
    assert response.json()["error"] == "Document not found"


async def test_download_with_missing_file_is_404(client: AsyncClient, fake_backend) -> None:
    document = await _upload(client, PDF_A)
    stored = fake_backend.documents.documents[0]
    await fake_backend.storage.delete(stored.relative_path)
    response = await client.get(f"/api/v1/documents/{document['id']}/download")
    assert response.status_code == 404
    assert response.json()["error"] == "File not found on server"
