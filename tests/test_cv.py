"""
Tests for the AI CV builder endpoints and helpers.

AI providers are never called: generation functions are monkeypatched.
"""

import asyncio

import pytest

from workwise.core.config import settings
from workwise.schemas.cv import CVScanData, ExtractedProfile, JobInfo, ScanWarning, SummaryRequest
from workwise.services import claude_cv_writer, cv_writer
from workwise.services.cv_writer import CVGenerationError

SUMMARY_BODY = {
    "name": "Lerato Dlamini",
    "skills": ["Customer Service", "Cash Handling"],
    "experience": "Two years as a cashier at Shoprite",
    "education": "Matric",
}


@pytest.fixture
def openai_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")


@pytest.fixture
def anthropic_key(monkeypatch):
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "sk-ant-test")


class TestOpenAIEndpoints:
    """Tests for /api/cv/* (OpenAI)"""

    def test_generate_summary(self, client, openai_key, monkeypatch):
        captured = {}

        async def fake_summary(data):
            captured["data"] = data
            return "Reliable cashier with two years of experience."

        monkeypatch.setattr(cv_writer, "generate_professional_summary", fake_summary)

        response = client.post("/api/cv/generate-summary", json=SUMMARY_BODY)

        assert response.status_code == 200
        assert response.json() == {"summary": "Reliable cashier with two years of experience."}
        assert captured["data"].language == "English"

    def test_generate_summary_missing_fields(self, client, openai_key):
        response = client.post("/api/cv/generate-summary", json={"name": "Lerato"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields for generating a professional summary"

    def test_missing_api_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

        response = client.post("/api/cv/generate-summary", json=SUMMARY_BODY)

        assert response.status_code == 500
        assert response.json()["detail"] == "OpenAI API key is not configured"

    def test_generate_job_description(self, client, openai_key, monkeypatch):
        async def fake_description(job_info, language):
            assert job_info.job_title == "Cashier"
            assert language == "isiZulu"
            return "- Handled cash"

        monkeypatch.setattr(cv_writer, "generate_job_description", fake_description)

        response = client.post("/api/cv/generate-job-description", json={
            "jobInfo": {"jobTitle": "Cashier", "employer": "Shoprite"},
            "language": "isiZulu",
        })

        assert response.status_code == 200
        assert response.json() == {"description": "- Handled cash"}

    def test_generate_job_description_missing_employer(self, client, openai_key):
        response = client.post("/api/cv/generate-job-description", json={"jobInfo": {"jobTitle": "Cashier"}})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required job information"

    def test_translate(self, client, openai_key, monkeypatch):
        async def fake_translate(text, target_language):
            return f"[{target_language}] {text}"

        monkeypatch.setattr(cv_writer, "translate_text", fake_translate)

        response = client.post("/api/cv/translate", json={"text": "Hello", "targetLanguage": "Afrikaans"})

        assert response.status_code == 200
        assert response.json() == {"translatedText": "[Afrikaans] Hello"}

    def test_translate_missing_language(self, client, openai_key):
        response = client.post("/api/cv/translate", json={"text": "Hello"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing text or target language"

    def test_generation_failure(self, client, openai_key, monkeypatch):
        async def failing(text, target_language):
            raise CVGenerationError("Failed after 3 attempts: rate limited")

        monkeypatch.setattr(cv_writer, "translate_text", failing)

        response = client.post("/api/cv/translate", json={"text": "Hello", "targetLanguage": "Sesotho"})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["message"] == "Failed to translate text"
        assert "rate limited" in detail["error"]


class TestClaudeEndpoints:
    """Tests for /api/cv/claude/*"""

    def test_missing_anthropic_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "")

        response = client.post("/api/cv/claude/generate-summary", json=SUMMARY_BODY)

        assert response.status_code == 500
        assert response.json()["detail"] == "Anthropic API key is not configured"

    def test_claude_summary(self, client, anthropic_key, monkeypatch):
        async def fake_summary(data):
            return "Summary from Claude"

        monkeypatch.setattr(claude_cv_writer, "generate_professional_summary", fake_summary)

        response = client.post("/api/cv/claude/generate-summary", json=SUMMARY_BODY)

        assert response.status_code == 200
        assert response.json() == {"summary": "Summary from Claude"}

    def test_claude_translate_failure(self, client, anthropic_key, monkeypatch):
        async def failing(text, target_language):
            raise RuntimeError("overloaded")

        monkeypatch.setattr(claude_cv_writer, "translate_text", failing)

        response = client.post("/api/cv/claude/translate", json={"text": "Hi", "targetLanguage": "isiXhosa"})

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == "Failed to translate text with Claude"

    def test_analyze_image(self, client, anthropic_key, monkeypatch):
        async def fake_analyze(image):
            assert image.startswith("data:image/png;base64,")
            return "A handwritten CV with contact details."

        monkeypatch.setattr(claude_cv_writer, "analyze_image", fake_analyze)

        response = client.post("/api/cv/claude/analyze-image", json={"image": "data:image/png;base64,iVBORw0KGgo="})

        assert response.status_code == 200
        assert response.json() == {"analysis": "A handwritten CV with contact details."}

    def test_analyze_image_missing_data(self, client, anthropic_key):
        response = client.post("/api/cv/claude/analyze-image", json={})

    def test_analyze_image_unsupported_type(self, client, anthropic_key):
        response = client.post("/api/cv/claude/analyze-image", json={"image": "data:image/tiff;base64,AAAA"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unsupported image type: image/tiff"

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing image data"


class TestPromptsAndRetries:
    """Unit tests for prompt building, image parsing and retries"""

    def test_summary_prompt_includes_inputs(self):
        prompt = cv_writer.build_summary_prompt(SummaryRequest(**SUMMARY_BODY, language="Sesotho"))

        assert "Lerato Dlamini" in prompt
        assert "Customer Service, Cash Handling" in prompt
        assert "Sesotho" in prompt

    def test_job_description_prompt_includes_extra_fields(self):
        info = JobInfo.model_validate({"jobTitle": "Cashier", "employer": "Shoprite", "branch": "Soweto"})

        prompt = cv_writer.build_job_description_prompt(info, "English")

        assert "Job title: Cashier" in prompt
        assert "Employer: Shoprite" in prompt
        assert "branch: Soweto" in prompt

    def test_parse_data_url(self):
        assert claude_cv_writer.parse_image("data:image/jpg;base64,AAAA") == ("image/jpeg", "AAAA")

    def test_parse_bare_base64(self):
        assert claude_cv_writer.parse_image("AAAA") == ("image/jpeg", "AAAA")

    def test_parse_unsupported_type(self):
        with pytest.raises(claude_cv_writer.UnsupportedMediaError):
            claude_cv_writer.parse_image("data:application/pdf;base64,AAAA")

    def test_with_retries_recovers(self, monkeypatch):
        async def no_sleep(seconds):
            return None

        monkeypatch.setattr(cv_writer.asyncio, "sleep", no_sleep)
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise RuntimeError("timeout")
            return "  done  "

        assert asyncio.run(cv_writer.with_retries(flaky, "test")) == "done"
        assert len(calls) == 3

    def test_with_retries_gives_up(self, monkeypatch):
        async def no_sleep(seconds):
            return None

        monkeypatch.setattr(cv_writer.asyncio, "sleep", no_sleep)

        async def empty():
            return ""

        with pytest.raises(CVGenerationError):
            asyncio.run(cv_writer.with_retries(empty, "test", max_retries=2))


SCAN_REPLY = """```json
{
  "extractedData": {
    "personal": {"fullName": "Sipho Nkosi", "location": "Soweto"},
    "skills": {"skills": ["Forklift", "Stock control"], "languages": ["isiZulu", "English"]}
  },
  "warnings": [
    {"type": "handwritten", "section": "personal", "message": "Phone number is handwritten",
     "suggestedFix": "Type your phone number"}
  ],
  "confidence": [{"section": "personal", "confidence": 0.8}]
}
```"""


class TestProfileAIEndpoints:
    """Tests for /api/scan-cv and /api/process-ai-prompt"""

    def test_scan_cv(self, client, anthropic_key, monkeypatch):
        captured = {}

        async def fake_scan(content, media_type, enhanced=True):
            captured.update(content=content, media_type=media_type, enhanced=enhanced)
            return CVScanData.model_validate(claude_cv_writer.parse_json_reply(SCAN_REPLY))

        monkeypatch.setattr(claude_cv_writer, "scan_cv", fake_scan)

        response = client.post(
            "/api/scan-cv",
            files={"file": ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")},
            data={"enhancedScan": "false"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["extractedData"] == {
            "personal": {"fullName": "Sipho Nkosi", "location": "Soweto"},
            "skills": {"skills": ["Forklift", "Stock control"], "languages": ["isiZulu", "English"]},
        }
        assert body["data"]["warnings"][0]["suggestedFix"] == "Type your phone number"
        assert body["data"]["confidence"] == [{"section": "personal", "confidence": 0.8}]
        assert captured == {"content": b"%PDF-1.4 cv", "media_type": "application/pdf", "enhanced": False}

    def test_scan_cv_rejects_word_documents(self, client, anthropic_key):
        response = client.post(
            "/api/scan-cv",
            files={"file": ("cv.docx", b"PK\x03\x04", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_FILE_TYPE"

    def test_scan_cv_missing_anthropic_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "")

        response = client.post("/api/scan-cv", files={"file": ("cv.txt", b"Sipho", "text/plain")})

        assert response.status_code == 500
        assert response.json()["detail"] == "Anthropic API key is not configured"

    def test_process_ai_prompt(self, client, anthropic_key, monkeypatch):
        async def fake_complete(content, max_tokens=None):
            prompt = content[0]["text"]
            assert "spelt Nkosi" in prompt
            assert '"fullName": "Sipho Nkos"' in prompt
            assert "handwritten" in prompt
            return 'Here you go: {"personal": {"fullName": "Sipho Nkosi"}}'

        monkeypatch.setattr(claude_cv_writer, "_complete", fake_complete)

        response = client.post("/api/process-ai-prompt", json={
            "prompt": "My surname is spelt Nkosi",
            "cvData": {"personal": {"fullName": "Sipho Nkos"}},
            "warnings": [{"type": "handwritten", "section": "personal", "message": "Name is handwritten"}],
        })

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"personal": {"fullName": "Sipho Nkosi"}}}

    def test_process_ai_prompt_missing_prompt(self, client, anthropic_key):
        response = client.post("/api/process-ai-prompt", json={"cvData": {}})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing prompt"

    def test_process_ai_prompt_unusable_reply(self, client, anthropic_key, monkeypatch):
        async def fake_complete(content, max_tokens=None):
            return "Sorry, I cannot help with that."

        monkeypatch.setattr(claude_cv_writer, "_complete", fake_complete)

        response = client.post("/api/process-ai-prompt", json={"prompt": "Fix my CV"})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["message"] == "Failed to process AI prompt"
        assert "JSON" in detail["error"]


class TestDocumentHandling:
    """Unit tests for CV content blocks, JSON replies and scanning"""

    def test_pdf_becomes_document_block(self):
        block = claude_cv_writer.document_block(b"%PDF", "application/pdf")

        assert block == {
            "type": "document",
            "source": {"type": "base64", "media_type": "application/pdf", "data": "JVBERg=="},
        }

    def test_jpg_alias_becomes_image_block(self):
        block = claude_cv_writer.document_block(b"\xff\xd8", "image/jpg")

        assert block["type"] == "image"
        assert block["source"]["media_type"] == "image/jpeg"

    def test_plain_text_is_inlined(self):
        assert claude_cv_writer.document_block("Sipho Nkosi".encode(), "text/plain; charset=utf-8") == {
            "type": "text",
            "text": "Sipho Nkosi",
        }

    def test_word_document_unsupported(self):
        with pytest.raises(claude_cv_writer.UnsupportedMediaError):
            claude_cv_writer.document_block(b"PK", "application/msword")

    def test_parse_json_reply_strips_fences(self):
        parsed = claude_cv_writer.parse_json_reply(SCAN_REPLY)

        assert parsed["extractedData"]["personal"]["fullName"] == "Sipho Nkosi"

    def test_parse_json_reply_rejects_prose(self):
        with pytest.raises(CVGenerationError):
            claude_cv_writer.parse_json_reply("No CV details found.")

    def test_scan_cv_validates_reply(self, monkeypatch):
        calls = []

        async def fake_complete(content, max_tokens=None):
            calls.append((content, max_tokens))
            return SCAN_REPLY

        monkeypatch.setattr(claude_cv_writer, "_complete", fake_complete)

        result = asyncio.run(claude_cv_writer.scan_cv(b"Sipho Nkosi", "text/plain", enhanced=True))

        assert result.extracted_data.personal.full_name == "Sipho Nkosi"
        assert result.warnings == [ScanWarning(
            type="handwritten",
            section="personal",
            message="Phone number is handwritten",
            suggested_fix="Type your phone number",
        )]
        content, max_tokens = calls[0]
        assert content[0] == {"type": "text", "text": "Sipho Nkosi"}
        assert "handwriting" in content[1]["text"]
        assert max_tokens == settings.ANTHROPIC_SCAN_MAX_TOKENS

    def test_scan_cv_wrong_shape(self, monkeypatch):
        async def fake_complete(content, max_tokens=None):
            return '{"warnings": "none"}'

        monkeypatch.setattr(claude_cv_writer, "_complete", fake_complete)

        with pytest.raises(CVGenerationError):
            asyncio.run(claude_cv_writer.scan_cv(b"%PDF", "application/pdf"))

    def test_profile_prompt_reply_is_partial(self, monkeypatch):
        async def fake_complete(content, max_tokens=None):
            return '{"education": {"schoolName": "Morris Isaacson High"}}'

        monkeypatch.setattr(claude_cv_writer, "_complete", fake_complete)

        result = asyncio.run(claude_cv_writer.apply_profile_prompt("Add my school", {}, []))

        assert result == ExtractedProfile.model_validate({"education": {"schoolName": "Morris Isaacson High"}})
        assert result.personal is None
