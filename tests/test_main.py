"""Tests for the command line entry point."""
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from statementlens import main as cli
from statementlens.config.manager import Config
from statementlens.models import ExtractionResult, Summary, Transaction
from statementlens.utils.exceptions import ExtractionFailedError

from fakes import StubExtractor

RESULT = ExtractionResult(
    transactions=(Transaction("2024-01-05", "Zomato Food Delivery", 450, 0, 15230),),
    summary=Summary(total_spend=450, total_received=0),
)


class TestRunExtraction(unittest.IsolatedAsyncioTestCase):
    """Test the extract command flow."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.statement = self.test_dir / "statement.png"
        self.statement.write_bytes(b"image bytes")
        self.config = Config(gemini_api_key="test_key")
        patcher = mock.patch.dict(os.environ, {"STATEMENTLENS_HOME": str(self.test_dir / "home")})
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    async def test_success_prints_and_exports(self):
        csv_path = self.test_dir / "out.csv"
        with mock.patch("builtins.print") as printed:
            code = await cli.run_extraction(
                [self.statement], self.config, csv_path, extractor=StubExtractor(result=RESULT)
            )

        self.assertEqual(code, 0)
        output = "\n".join(str(c.args[0]) for c in printed.call_args_list if c.args)
        self.assertIn("₹450.00", output)
        self.assertIn("statement.png (image, 11 bytes)", output)
        self.assertIn("Zomato Food Delivery", csv_path.read_text(encoding="utf-8"))

    async def test_failure_returns_error_code(self):
        extractor = StubExtractor(error=ExtractionFailedError("timeout"))
        with mock.patch("builtins.print"):
            code = await cli.run_extraction([self.statement], self.config, extractor=extractor)
        self.assertEqual(code, 1)

    async def test_no_readable_files(self):
        extractor = StubExtractor(result=RESULT)
        with mock.patch("builtins.print"):
            code = await cli.run_extraction(
                [self.test_dir / "missing.pdf"], self.config, extractor=extractor
            )
        self.assertEqual(code, 1)
        self.assertEqual(extractor.batches, [])


class TestMain(unittest.TestCase):
    """Test argument handling."""

    def test_check_config_without_key(self):
        with mock.patch.object(cli.ConfigManager, "load_config", return_value=None), \
                mock.patch("builtins.print"):
            self.assertEqual(cli.main(["check-config"]), 1)

    def test_check_config_valid(self):
        config = Config(gemini_api_key="test_key")
        with mock.patch.object(cli.ConfigManager, "load_config", return_value=config), \
                mock.patch("builtins.print"):
            self.assertEqual(cli.main(["check-config"]), 0)

    def test_model_override(self):
        config = Config(gemini_api_key="test_key")
        with mock.patch.object(cli.ConfigManager, "load_config", return_value=config):
            loaded = cli._load_and_validate_config("gemini-other")
        self.assertEqual(loaded.model_name, "gemini-other")

    def test_extract_requires_files(self):
        with self.assertRaises(SystemExit):
            cli.main(["extract"])


if __name__ == "__main__":
    unittest.main()
