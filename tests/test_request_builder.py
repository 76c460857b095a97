"""Tests for the extraction request builder."""
import unittest

from google.genai import types

from statementlens.extraction.request_builder import EXTRACTION_DIRECTIVE, build_request
from statementlens.extraction.schema import ExtractionResultSchema

from fakes import make_queued


class TestBuildRequest(unittest.TestCase):
    """Test request assembly."""

    def setUp(self):
        self.files = [
            make_queued("page1.png", b"first page", "image/png"),
            make_queued("page2.pdf", b"second page", "application/pdf"),
        ]

    def test_parts_follow_queue_order(self):
        request = build_request(self.files)

        self.assertEqual(
            request.parts,
            (
                (self.files[0].encoded_payload, "image/png"),
                (self.files[1].encoded_payload, "application/pdf"),
            )
        )
        self.assertEqual(request.instruction_text, EXTRACTION_DIRECTIVE)
        self.assertIs(request.output_schema, ExtractionResultSchema)

    def test_contents_end_with_directive(self):
        """One inline part per file, then a single text part."""
        contents = build_request(self.files).to_contents()

        self.assertEqual(len(contents), 3)
        self.assertEqual(contents[0].inline_data.data, b"first page")
        self.assertEqual(contents[0].inline_data.mime_type, "image/png")
        self.assertEqual(contents[1].inline_data.data, b"second page")
        self.assertEqual(contents[2].text, EXTRACTION_DIRECTIVE)

    def test_generation_config(self):
        config = build_request(self.files).generation_config()

        self.assertIsInstance(config, types.GenerateContentConfig)
        self.assertEqual(config.response_mime_type, "application/json")
        self.assertIs(config.response_schema, ExtractionResultSchema)

    def test_custom_instruction(self):
        request = build_request(self.files, instruction_text="Only list deposits.")
        self.assertEqual(request.to_contents()[-1].text, "Only list deposits.")

    def test_directive_covers_requirements(self):
        """The directive asks for everything the model is trusted with."""
        text = EXTRACTION_DIRECTIVE.upper()
        for keyword in ("CONSOLIDATE", "DEDUPLICATE", "TRANSLATE", "INR", "YYYY-MM-DD",
                        "SUMMARY", "PASSWORD PROTECTED"):
            self.assertIn(keyword, text)


class TestOutputSchema(unittest.TestCase):
    """Test the declared response schema."""

    def test_required_fields(self):
        schema = ExtractionResultSchema.model_json_schema()
        defs = schema["$defs"]

        self.assertEqual(set(schema["required"]), {"transactions", "summary"})
        self.assertEqual(
            set(defs["TransactionSchema"]["required"]),
            {"date", "description", "outflow", "inflow", "balance"}
        )
        self.assertEqual(set(defs["SummarySchema"]["required"]), {"total_spend", "total_received"})


if __name__ == "__main__":
    unittest.main()
