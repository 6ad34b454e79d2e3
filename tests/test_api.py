"""HTTP contract tests for POST /generate."""

import json

import pytest

from scene_enhancer.utils.errors import ProviderError

from conftest import plan_json


def test_success_returns_before_after_payload(api_client, provider, sample_image_url):
    response = api_client.post("/generate", json={
        "imageUrl": sample_image_url,
        "tipoAccion": "add_product",
        "ideaCliente": "next to the plant",
        "product_title": "Sofa",
        "product_category": "furniture",
        "product_style": "nordic",
        "product_id": "SKU-1",
        "product_price": "199",
    })

    assert response.status_code == 200
    assert response.json() == {
        "before_img": sample_image_url,
        "after_img": "data:image/png;base64,aGVsbG8=",
        "product_title": "Sofa",
        "product_price": "199",
        "product_id": "SKU-1",
        "scene_type": "living room",
        "edit_summary": "Place the sofa against the back wall",
        "placement_instructions": "Centered under the window",
        "lighting_instructions": "Warm afternoon light from the left",
        "extra_improvements": "Declutter the floor",
    }
    assert "- tipoAccion: add_product" in provider.analysis_calls[0]["system_prompt"]


@pytest.mark.parametrize("body", [
    {},
    {"imageUrl": ""},
    {"imageUrl": None},
    {"product_title": "Sofa"},
])
def test_missing_image_url(api_client, provider, body):
    response = api_client.post("/generate", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing imageUrl in body."}
    assert provider.analysis_calls == []
    assert provider.generation_calls == []


@pytest.mark.parametrize("raw", [b"", b"not json", b"[1, 2, 3]"])
def test_unusable_body_counts_as_missing_image(api_client, provider, raw):
    response = api_client.post(
        "/generate",
        content=raw,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing imageUrl in body."}
    assert provider.analysis_calls == []


def test_non_string_prompt_inputs_are_accepted(api_client, provider, sample_image_url):
    response = api_client.post("/generate", json={
        "imageUrl": sample_image_url,
        "tipoAccion": 3,
        "product_style": {"nested": True},
    })

    assert response.status_code == 200
    system_prompt = provider.analysis_calls[0]["system_prompt"]
    assert "- tipoAccion: 3" in system_prompt
    assert '- productStyle: {"nested": true}' in system_prompt


def test_product_fields_are_echoed_with_their_json_type(api_client, provider, sample_image_url):
    response = api_client.post("/generate", json={
        "imageUrl": sample_image_url,
        "product_id": True,
        "product_price": {"amount": 199},
        "product_title": ["a"],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["product_id"] is True
    assert body["product_price"] == {"amount": 199}
    assert body["product_title"] == ["a"]


def test_malformed_plan_is_invalid_image(api_client, provider, sample_image_url):
    provider.plan_content = "I cannot help with that."

    response = api_client.post("/generate", json={"imageUrl": sample_image_url})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image", "detail": "Invalid JSON"}
    assert provider.generation_calls == []


def test_rejected_plan_reason_is_returned(api_client, provider, sample_image_url):
    provider.plan_content = plan_json(valid_image=False, reason="The photo is too dark")

    response = api_client.post("/generate", json={"imageUrl": sample_image_url})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image", "detail": "The photo is too dark"}
    assert provider.generation_calls == []


def test_rejected_plan_without_reason(api_client, provider, sample_image_url):
    provider.plan_content = plan_json(valid_image=False)

    response = api_client.post("/generate", json={"imageUrl": sample_image_url})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image", "detail": "Rejected by analysis"}


def test_generation_failure_still_returns_200(api_client, provider, sample_image_url):
    provider.generation_error = ProviderError("openai", "timeout", 504)

    response = api_client.post("/generate", json={"imageUrl": sample_image_url, "product_id": 7})

    assert response.status_code == 200
    body = response.json()
    assert body["after_img"] == sample_image_url
    assert body["product_id"] == 7
    assert body["scene_type"] == "living room"


def test_sofa_scenario(api_client, provider):
    provider.plan_content = '{"valid_image":true,"scene_type":"living room","image_prompt":"place sofa"}'
    provider.image_data = []

    response = api_client.post("/generate", json={
        "imageUrl": "https://x/img.jpg",
        "product_title": "Sofa",
        "product_price": "199",
    })

    assert response.status_code == 200
    assert response.json() == {
        "before_img": "https://x/img.jpg",
        "after_img": "https://x/img.jpg",
        "product_title": "Sofa",
        "product_price": "199",
        "product_id": "",
        "scene_type": "living room",
        "edit_summary": "",
        "placement_instructions": "",
        "lighting_instructions": "",
        "extra_improvements": "",
    }


def test_stage_one_failure_is_generic_500(api_client, provider, sample_image_url):
    provider.analysis_error = ProviderError("openai", "secret upstream detail", 500)

    response = api_client.post("/generate", json={"imageUrl": sample_image_url})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal AI server error."}
    assert "secret" not in response.text
    assert provider.generation_calls == []


def test_unexpected_error_is_generic_500(api_client, provider, sample_image_url):
    provider.analysis_error = KeyError("choices")

    response = api_client.post("/generate", json={"imageUrl": sample_image_url})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal AI server error."}


def test_oversized_body_is_rejected(api_client, provider):
    from scene_enhancer.main import app

    app.state.max_body_bytes = 1024
    payload = json.dumps({"imageUrl": "data:image/png;base64," + "A" * 2048})

    response = api_client.post(
        "/generate",
        content=payload,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large."}
    assert provider.analysis_calls == []


def test_data_uri_image_is_accepted(api_client, provider):
    image = "data:image/jpeg;base64," + "A" * 4096

    response = api_client.post("/generate", json={"imageUrl": image})

    assert response.status_code == 200
    assert response.json()["before_img"] == image
    assert provider.analysis_calls[0]["image_url"] == image


def test_cors_allows_any_origin(api_client, sample_image_url):
    response = api_client.post(
        "/generate",
        json={"imageUrl": sample_image_url},
        headers={"Origin": "https://shop.example"},
    )

    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(api_client):
    response = api_client.options(
        "/generate",
        headers={
            "Origin": "https://shop.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_health_endpoints(api_client):
    health = api_client.get("/health/")
    ready = api_client.get("/health/ready")
    root = api_client.get("/")

    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert ready.json()["ready"] is True
    assert root.json()["service"] == "scene-enhancer"


def test_chunked_body_over_limit_is_rejected(api_client, provider):
    from scene_enhancer.main import app

    app.state.max_body_bytes = 1024

    def chunks():
        yield b'{"imageUrl": "data:image/png;base64,'
        for _ in range(8):
            yield b"A" * 512
        yield b'"}'

    response = api_client.post(
        "/generate",
        content=chunks(),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large."}
    assert provider.analysis_calls == []
