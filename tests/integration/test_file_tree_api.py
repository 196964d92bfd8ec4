"""Integration tests for the uploaded-files tree endpoint."""

from __future__ import annotations

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

pytestmark = pytest.mark.integration


def test_tree_lists_uploaded_files(auth_client, create_order):
    order = create_order()
    create_order()
    auth_client.post(
        f"/api/v1/orders/{order.id}/files/",
        {"bucket": "attachments", "files": [SimpleUploadedFile("po.pdf", b"%PDF-1.4")]},
        format="multipart",
    )

    response = auth_client.get("/api/v1/files/tree/")

    assert response.status_code == 200
    [coordinator] = response.json()
    assert coordinator["name"] == "Priya Nair"
    [month] = coordinator["children"]
    assert month["name"] == "March 2024"
    [order_node] = month["children"]
    assert order_node["name"] == order.order_code
    [folder] = order_node["children"]
    assert folder["name"] == "Attachments"
    assert folder["children"][0]["name"] == "attachment-1.pdf"
    assert folder["children"][0]["type"] == "file"


def test_empty_tree(auth_client, create_order):
    create_order()
    assert auth_client.get("/api/v1/files/tree/").json() == []
