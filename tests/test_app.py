"""Tests for the HTTP endpoints."""

from __future__ import annotations

import io
import json
import zipfile

from fastapi.testclient import TestClient

from dotsimplifier.app import app


client = TestClient(app)

SQUARE_TEXT = "[10,10],\n[90,10],\n[90,90],\n[10,90],\n[10,10,-1]"
SOURCE_FORM = {"epsilon": "1", "min_distance": "0.5", "should_resize": "false"}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "dot-simplifier"}


def test_process_json(square_svg):
    response = client.post("/process", json={
        "svg": square_svg,
        "options": {"epsilon": 1, "min_distance": 0.5, "should_resize": False},
    })
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == SQUARE_TEXT
    assert data["stats"]["shape_count"] == 1


def test_process_reports_pipeline_errors(no_shapes_svg):
    response = client.post("/process", json={"svg": no_shapes_svg})
    assert response.status_code == 400
    assert "No valid shapes" in response.json()["detail"]


def test_process_rejects_bad_options(square_svg):
    response = client.post("/process", json={"svg": square_svg, "options": {"epsilon": 0}})
    assert response.status_code == 422


def test_simplify_upload_returns_zip(square_svg):
    response = client.post(
        "/simplify",
        files={"file": ("square.svg", square_svg.encode("utf-8"), "image/svg+xml")},
        data=SOURCE_FORM,
    )
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    assert 'filename="square_dots.zip"' in response.headers["content-disposition"]

    stats = json.loads(response.headers["x-stats"])
    assert stats["shape_count"] == 1

    with zipfile.ZipFile(io.BytesIO(response.content)) as zf:
        assert sorted(zf.namelist()) == ["square_dots.dxf", "square_dots.svg", "square_dots.txt"]
        assert zf.read("square_dots.txt").decode("utf-8") == SQUARE_TEXT


def test_simplify_rejects_other_extensions():
    response = client.post("/simplify", files={"file": ("drawing.dxf", b"0\nEOF\n")})
    assert response.status_code == 400


def test_simplify_rejects_empty_file():
    response = client.post("/simplify", files={"file": ("empty.svg", b"")})
    assert response.status_code == 400
    assert response.json()["detail"] == "Empty file uploaded."


def test_simplify_rejects_invalid_options(square_svg):
    response = client.post(
        "/simplify",
        files={"file": ("square.svg", square_svg.encode("utf-8"))},
        data={"epsilon": "-2"},
    )
    assert response.status_code == 400


def test_simplify_reports_malformed_svg():
    response = client.post("/simplify", files={"file": ("bad.svg", b"<svg><path></svg>")})
    assert response.status_code == 400
    assert "Failed to parse SVG" in response.json()["detail"]


def test_parse_coordinates_tolerates_noise():
    response = client.post("/coordinates/parse", json={"text": "junk [1,2] [3, 4,-1] more"})
    assert response.status_code == 200
    data = response.json()
    assert data["text"] == "[1,2],\n[3,4,-1]"
    assert data["shapes"] == [{"points": [[1.0, 2.0], [3.0, 4.0]], "closed": True}]


def test_parse_coordinates_empty():
    response = client.post("/coordinates/parse", json={"text": "nothing"})
    assert response.status_code == 200
    assert response.json() == {"text": "", "shapes": []}


def test_edit_add_starts_new_shape_after_closed_one():
    response = client.post("/coordinates/edit", json={
        "text": SQUARE_TEXT,
        "operation": {"action": "add", "x": 50, "y": 50},
    })
    assert response.status_code == 200
    assert response.json()["text"] == SQUARE_TEXT + "\n\n[50,50]"


def test_edit_move_and_delete():
    moved = client.post("/coordinates/edit", json={
        "text": SQUARE_TEXT,
        "operation": {"action": "move", "shape_index": 0, "point_index": 1, "x": 95.25, "y": 5},
    })
    assert moved.json()["text"].startswith("[10,10],\n[95.25,5],\n")

    deleted = client.post("/coordinates/edit", json={
        "text": moved.json()["text"],
        "operation": {"action": "delete", "shape_index": 0, "point_index": 4},
    })
    # the shape keeps its closure flag
    assert deleted.json()["text"] == "[10,10],\n[95.25,5],\n[90,90],\n[10,90,-1]"


def test_edit_with_bad_index():
    response = client.post("/coordinates/edit", json={
        "text": SQUARE_TEXT,
        "operation": {"action": "delete", "shape_index": 3, "point_index": 0},
    })
    assert response.status_code == 400


def test_edit_requires_fields_for_action():
    response = client.post("/coordinates/edit", json={
        "text": SQUARE_TEXT,
        "operation": {"action": "move", "shape_index": 0, "point_index": 0},
    })
    assert response.status_code == 422


def test_edit_rejects_non_finite_coordinates():
    body = '{"text": "[1,2]", "operation": {"action": "add", "x": Infinity, "y": 5}}'
    response = client.post(
        "/coordinates/edit",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


def test_process_rejects_out_of_range_numbers():
    response = client.post("/process", json={"svg": '<svg><path d="M 0 0 L 1e400 5"/></svg>'})
    assert response.status_code == 400
    assert "out of range" in response.json()["detail"]
