from urllib.parse import quote

import pytest
from httpx import AsyncClient

from quotebuilder.main import app
from quotebuilder.pdf.config import PDFSettings
from quotebuilder.pdf.interfaces.api import content_disposition
from quotebuilder.pdf.interfaces.dependencies import get_pdf_settings

pytestmark = pytest.mark.asyncio

ORDER_PAYLOAD = {
    "builderName": "Acme Builders",
    "jobName": "Smith Residence",
    "quoteNumber": 3,
    "items": [
        {"type": "window", "width": "36", "height": "48", "style": "casement", "subOption": "left"},
        {"type": "door", "width": "36", "height": "80", "panelType": "single", "handing": "lh-in",
         "notes": "Threshold to match tile"},
    ],
}


@pytest.fixture
def pdf_assets(tmp_path):
    app.dependency_overrides[get_pdf_settings] = lambda: PDFSettings(ASSETS_DIR=str(tmp_path), FONT_PATH=None)
    yield tmp_path
    app.dependency_overrides.pop(get_pdf_settings, None)


async def test_order_document_requires_identity(test_client: AsyncClient, pdf_assets):
    response = await test_client.post("/api/v1/documents/order", json=ORDER_PAYLOAD)
    assert response.status_code == 401


async def test_order_document_validates_input(test_client: AsyncClient, owner_headers, pdf_assets):
    response = await test_client.post(
        "/api/v1/documents/order", json={**ORDER_PAYLOAD, "jobName": " "}, headers=owner_headers
    )
    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "missing_information"


async def test_order_document_returns_pdf(test_client: AsyncClient, owner_headers, pdf_assets):
    response = await test_client.post("/api/v1/documents/order", json=ORDER_PAYLOAD, headers=owner_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"].startswith('attachment; filename="Smith_Residence_order.pdf"')
    assert response.headers["x-page-count"] == "1"
    assert response.content.startswith(b"%PDF")


async def test_order_document_with_non_latin_job_name(test_client: AsyncClient, owner_headers, pdf_assets):
    payload = {**ORDER_PAYLOAD, "jobName": 'Résidence "Nord" 工程'}
    response = await test_client.post("/api/v1/documents/order", json=payload, headers=owner_headers)
    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    utf8_name = quote('Résidence_"Nord"_工程_order.pdf', safe="")
    assert disposition == f"attachment; filename=\"Residence__Nord___order.pdf\"; filename*=UTF-8''{utf8_name}"
    assert response.content.startswith(b"%PDF")


async def test_content_disposition_ascii_fallback():
    header = content_disposition("Smith_Residence_order.pdf")
    assert header == (
        "attachment; filename=\"Smith_Residence_order.pdf\"; filename*=UTF-8''Smith_Residence_order.pdf"
    )
